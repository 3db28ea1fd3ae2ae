from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL)

# ✅ 스키마(모델 + 뷰) 임포트
from database.schema import init_db

# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import students, instructors, courses, enrollments, audits, analytics


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ✅ 시작 시 테이블/인덱스/뷰 생성 (이미 있으면 유지)
    init_db()
    yield


app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# ✅ CORS 설정 (프론트엔드 연동 대비)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /v1 프리픽스 라우터 등록
app.include_router(students.router,     prefix="/v1")
app.include_router(instructors.router,  prefix="/v1")
app.include_router(courses.router,      prefix="/v1")
app.include_router(enrollments.router,  prefix="/v1")
app.include_router(audits.router,       prefix="/v1")
app.include_router(analytics.router,    prefix="/v1")

# ✅ 헬스체크 엔드포인트
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}

# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": "University DB API - 학생/교수/강의/수강신청"}
