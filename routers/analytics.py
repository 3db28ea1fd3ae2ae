from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from database.db import get_db
from schemas.analytics import PopularCourse, CourseGPA
from services.analytics import top_popular_courses, course_gpa_report
from utils.responses import ok

router = APIRouter(prefix="/analytics", tags=["분석 리포트"])


# ✅ [REPORT] 인기 강의 TOP N (기본 3개)
#    - 동률이면 course_id 오름차순
@router.get("/top-courses")
def get_top_courses(limit: int = Query(None, ge=1, le=100), db: Session = Depends(get_db)):
    rows = top_popular_courses(db, limit=limit)
    return ok(
        [PopularCourse(**r).model_dump() for r in rows],
        "인기 강의 조회 성공",
    )


# ✅ [REPORT] 강의별 평점(GPA) 리포트
@router.get("/course-gpa")
def get_course_gpa(db: Session = Depends(get_db)):
    rows = course_gpa_report(db)
    return ok(
        [CourseGPA(**r).model_dump() for r in rows],
        "강의별 평점 리포트 조회 성공",
    )
