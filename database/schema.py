"""
database/schema.py

- 스키마 DDL 관리: 테이블/인덱스 생성, 리포팅 뷰(v_course_analytics), instructor_role 권한
- 뷰는 Base.metadata의 after_create / before_drop 이벤트에 묶여 있어
  create_all / drop_all 시 테이블과 함께 생성/삭제됨
"""

import logging
from typing import Optional

from sqlalchemy import Column, Integer, String, CHAR, MetaData, Table, event, select, text

from database.db import Base, engine
from models.students import Student
from models.instructors import Instructor
from models.courses import Course
from models.enrollments import Enrollment

logger = logging.getLogger(__name__)

__all__ = [
    "Student", "Instructor", "Course", "Enrollment",
    "VIEW_NAME", "v_course_analytics", "course_analytics_select",
    "init_db", "instructor_role_statements", "grant_instructor_role",
]

VIEW_NAME = "v_course_analytics"
INSTRUCTOR_ROLE = "instructor_role"

# ==========================================================
# [뷰] v_course_analytics
# ==========================================================

# ✅ 뷰를 조회하기 위한 Table 객체 (별도 MetaData → create_all 대상 아님)
view_metadata = MetaData()
v_course_analytics = Table(
    VIEW_NAME,
    view_metadata,
    Column("course_id", Integer),
    Column("course_name", String(100)),
    Column("student_id", Integer),
    Column("grade", CHAR(2)),
)


def course_analytics_select():
    """강의 ⋈ 수강신청, 수강신청 1건당 1행"""
    return select(
        Course.course_id,
        Course.course_name,
        Enrollment.student_id,
        Enrollment.grade,
    ).join(Enrollment, Course.course_id == Enrollment.course_id)


def _create_view_sql(dialect) -> str:
    compiled = course_analytics_select().compile(
        dialect=dialect, compile_kwargs={"literal_binds": True}
    )
    return f"CREATE VIEW {VIEW_NAME} AS {compiled}"


@event.listens_for(Base.metadata, "after_create")
def _create_views(target, connection, **kw):
    connection.execute(text(f"DROP VIEW IF EXISTS {VIEW_NAME}"))
    connection.execute(text(_create_view_sql(connection.dialect)))
    logger.info("뷰 생성 완료: %s", VIEW_NAME)


@event.listens_for(Base.metadata, "before_drop")
def _drop_views(target, connection, **kw):
    connection.execute(text(f"DROP VIEW IF EXISTS {VIEW_NAME}"))


# ==========================================================
# [DDL] 스키마 생성
# ==========================================================

def init_db(bind=None, drop_existing: bool = False) -> None:
    """
    테이블/인덱스/뷰 생성.
    - drop_existing=True: 기존 뷰와 테이블을 모두 지우고 다시 생성
    """
    bind = bind if bind is not None else engine
    if drop_existing:
        Base.metadata.drop_all(bind)
        logger.info("기존 스키마 삭제 완료")
    Base.metadata.create_all(bind)
    logger.info("스키마 생성 완료: %s", ", ".join(Base.metadata.tables))


# ==========================================================
# [보안] 역할 기반 접근 제어
# ==========================================================

def instructor_role_statements(db_name: str) -> list[str]:
    """instructor_role: Course / Enrollment 읽기 전용"""
    return [
        f"CREATE ROLE IF NOT EXISTS {INSTRUCTOR_ROLE}",
        f"GRANT SELECT ON {db_name}.{Course.__tablename__} TO {INSTRUCTOR_ROLE}",
        f"GRANT SELECT ON {db_name}.{Enrollment.__tablename__} TO {INSTRUCTOR_ROLE}",
    ]


def grant_instructor_role(bind=None, db_name: Optional[str] = None) -> bool:
    """
    역할 생성 및 권한 부여. 역할을 지원하지 않는 엔진(SQLite)에서는 건너뛰고 False 반환.
    """
    bind = bind if bind is not None else engine
    if bind.dialect.name != "mysql":
        logger.info("'%s' 엔진은 역할을 지원하지 않음 → %s 생성 건너뜀", bind.dialect.name, INSTRUCTOR_ROLE)
        return False

    db_name = db_name or bind.url.database
    with bind.begin() as conn:
        for statement in instructor_role_statements(db_name):
            conn.execute(text(statement))
    logger.info("%s 권한 부여 완료 (db=%s)", INSTRUCTOR_ROLE, db_name)
    return True
