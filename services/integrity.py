"""
services/integrity.py

- 제약조건 위반은 DB 엔진이 거부하고, 여기서는 DB 에러(IntegrityError, MySQL CHECK 3819)를
  도메인 예외로 번역만 함
- run_negative_checks: 반드시 실패해야 하는 INSERT 3종(중복 수강, 잘못된 성적, 학점 범위)을
  실행해 엔진이 거부하는지 확인
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import insert
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from models.courses import Course
from models.enrollments import Enrollment

logger = logging.getLogger(__name__)

# 이름으로 식별 가능한 제약조건 (MySQL 에러 메시지, SQLite CHECK 메시지에 이름이 포함됨)
NAMED_CONSTRAINTS = (
    "uq_student_course",
    "uq_student_email",
    "chk_grade",
    "chk_credits",
    "fk_course_instructor",
    "fk_enroll_student",
    "fk_enroll_course",
)

# SQLite는 UNIQUE 위반 시 이름 대신 컬럼 목록을 돌려줌
_SQLITE_UNIQUE_COLUMNS = {
    "enrollment.student_id, enrollment.course_id": "uq_student_course",
    "student.email": "uq_student_email",
}


class ConstraintViolation(Exception):
    """엔진이 거부한 문장 (UNIQUE / CHECK / FK / NOT NULL)"""

    def __init__(self, constraint: str, message: str):
        super().__init__(message)
        self.constraint = constraint
        self.message = message

    @classmethod
    def from_integrity_error(cls, exc: DBAPIError) -> "ConstraintViolation":
        detail = str(exc.orig) if exc.orig is not None else str(exc)
        return cls(classify_integrity_error(detail), detail)


# MySQL 8: CHECK 위반(3819)은 PyMySQL이 OperationalError로 올려 보냄
MYSQL_CHECK_VIOLATED = 3819


def as_constraint_violation(exc: DBAPIError) -> Optional[ConstraintViolation]:
    """엔진이 제약조건으로 문장을 거부한 경우만 ConstraintViolation, 그 외(연결 끊김 등)는 None"""
    if isinstance(exc, IntegrityError):
        return ConstraintViolation.from_integrity_error(exc)
    args = getattr(exc.orig, "args", ())
    if args and args[0] == MYSQL_CHECK_VIOLATED:
        return ConstraintViolation.from_integrity_error(exc)
    return None


def classify_integrity_error(detail: str) -> str:
    lowered = detail.lower()
    for name in NAMED_CONSTRAINTS:
        if name in lowered:
            return name
    if "unique constraint failed" in lowered:
        for columns, name in _SQLITE_UNIQUE_COLUMNS.items():
            if columns in lowered:
                return name
    if "foreign key" in lowered:
        return "foreign_key"
    if "not null" in lowered or "cannot be null" in lowered:
        return "not_null"
    if "unique" in lowered or "duplicate" in lowered:
        return "unique"
    if "check" in lowered:
        return "check"
    return "unknown"


def commit_or_raise(db: Session) -> None:
    """커밋 실패 시 롤백. 제약조건 위반이면 ConstraintViolation, 그 외 DB 에러는 그대로 다시 던짐"""
    try:
        db.commit()
    except DBAPIError as exc:
        db.rollback()
        violation = as_constraint_violation(exc)
        if violation is None:
            raise
        logger.warning("제약조건 위반으로 거부됨: constraint=%s detail=%s", violation.constraint, violation.message)
        raise violation from exc


# ==========================================================
# [검증] 반드시 실패해야 하는 문장
# ==========================================================

NEGATIVE_CHECKS = {
    # 같은 (student_id, course_id) 재등록
    "duplicate_enrollment": insert(Enrollment).values(
        student_id=1, course_id=1, enrollment_date=date(2024, 2, 1), grade="A"
    ),
    # 허용되지 않는 성적
    "invalid_grade": insert(Enrollment).values(
        student_id=1, course_id=1, enrollment_date=date(2024, 2, 1), grade="Z"
    ),
    # 학점 범위(1~6) 초과
    "invalid_credits": insert(Course).values(
        course_name="Invalid Course", credits=10, instructor_id=1
    ),
}


def run_negative_checks(db: Session) -> dict[str, bool]:
    """
    각 문장을 별도 트랜잭션에서 실행하고 항상 롤백.
    결과: {이름: 거부되었으면 True}. 실행 전 세션의 미커밋 변경은 버려짐.
    """
    results: dict[str, bool] = {}
    for name, statement in NEGATIVE_CHECKS.items():
        error: Optional[ConstraintViolation] = None
        try:
            db.execute(statement)
        except DBAPIError as exc:
            db.rollback()
            error = as_constraint_violation(exc)
            if error is None:
                raise
        else:
            db.rollback()

        results[name] = error is not None
        if error is not None:
            logger.info("[%s] 엔진이 거부함: %s", name, error.constraint)
        else:
            logger.warning("[%s] 거부되어야 할 문장이 통과됨", name)
    return results
