import logging

from sqlalchemy import create_engine, event               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import declarative_base, sessionmaker # 모델의 Base 클래스 / 세션 팩토리
from sqlalchemy.pool import StaticPool

from config.settings import settings                      # ✅ 환경변수 설정 파일 불러오기

logger = logging.getLogger(__name__)

# ✅ MySQL 테이블 공통 옵션 (InnoDB + utf8mb4), SQLite에서는 무시됨
TABLE_OPTIONS = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
    "mysql_collate": "utf8mb4_unicode_ci",
}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite는 연결마다 FK 강제를 켜야 CASCADE / RESTRICT가 동작함
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str, echo: bool = False):
    """
    DB URL로 엔진 생성.
    - SQLite: 연결 시 foreign_keys PRAGMA 활성화, 메모리 DB는 단일 연결(StaticPool) 공유
    - MySQL: pool_pre_ping으로 끊긴 연결 재사용 방지
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        new_engine = create_engine(url, echo=echo, **kwargs)
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        new_engine = create_engine(url, echo=echo, pool_pre_ping=True)

    logger.debug("DB 엔진 생성: dialect=%s", new_engine.dialect.name)
    return new_engine


# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


def get_db():
    """FastAPI 의존성: 요청 단위 세션"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
