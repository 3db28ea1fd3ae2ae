"""
services/audits.py

- 참조 무결성 / 도메인 / 중복 / 논리적 공백 감사 쿼리 모음
- 모든 감사 쿼리는 읽기 전용이며, 일관된 DB에서는 빈 결과를 반환해야 함
  (제약조건이 나중에 추가된 경우 등, 기존 데이터를 재검증하는 용도)
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from models.courses import Course, MAX_CREDITS, MIN_CREDITS
from models.enrollments import Enrollment, GRADES
from models.instructors import Instructor
from models.students import Student

logger = logging.getLogger(__name__)

# 감사 분류
ORPHAN = "orphan"
DOMAIN = "domain"
DUPLICATE = "duplicate"
GAP = "gap"

# 결과가 있으면 무결성 위반인 분류 (GAP은 참고용)
INTEGRITY_CATEGORIES = (ORPHAN, DOMAIN, DUPLICATE)


class UnknownAuditError(KeyError):
    pass


@dataclass(frozen=True)
class AuditQuery:
    name: str
    category: str
    description: str
    statement: Select


@dataclass
class AuditReport:
    results: dict[str, list[dict[str, Any]]] = field(default_factory=dict)

    @property
    def violations(self) -> dict[str, list[dict[str, Any]]]:
        return {
            name: rows
            for name, rows in self.results.items()
            if rows and AUDIT_QUERIES[name].category in INTEGRITY_CATEGORIES
        }

    @property
    def gaps(self) -> dict[str, list[dict[str, Any]]]:
        return {
            name: rows
            for name, rows in self.results.items()
            if AUDIT_QUERIES[name].category == GAP
        }

    @property
    def is_consistent(self) -> bool:
        return not self.violations

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_consistent": self.is_consistent,
            "violations": {name: len(rows) for name, rows in self.violations.items()},
            "results": self.results,
        }


# ==========================================================
# [1] 참조 무결성 (고아 행)
# ==========================================================

def _orphans(child, child_key, parent, parent_key) -> Select:
    return (
        select(child.__table__)
        .outerjoin(parent, child_key == parent_key)
        .where(parent_key.is_(None))
    )


# ==========================================================
# [3] 중복 (PK / 자연키)
# ==========================================================

def _duplicates(*columns, label: str = "duplicate_count") -> Select:
    return (
        select(*columns, func.count().label(label))
        .group_by(*columns)
        .having(func.count() > 1)
    )


def _build_queries() -> dict[str, AuditQuery]:
    queries = [
        # 참조 무결성
        AuditQuery(
            "enrollment_missing_student", ORPHAN,
            "존재하지 않는 학생을 가리키는 수강신청",
            _orphans(Enrollment, Enrollment.student_id, Student, Student.student_id),
        ),
        AuditQuery(
            "enrollment_missing_course", ORPHAN,
            "존재하지 않는 강의를 가리키는 수강신청",
            _orphans(Enrollment, Enrollment.course_id, Course, Course.course_id),
        ),
        AuditQuery(
            "course_missing_instructor", ORPHAN,
            "존재하지 않는 교수를 가리키는 강의",
            _orphans(Course, Course.instructor_id, Instructor, Instructor.instructor_id),
        ),
        # 도메인 / 비즈니스 규칙
        AuditQuery(
            "invalid_grades", DOMAIN,
            "허용 범위(A~F) 밖의 성적 값",
            select(Enrollment.grade)
            .distinct()
            .where(Enrollment.grade.not_in(GRADES), Enrollment.grade.is_not(None)),
        ),
        AuditQuery(
            "credit_range_violations", DOMAIN,
            f"학점이 {MIN_CREDITS}~{MAX_CREDITS} 범위를 벗어난 강의",
            select(Course.__table__).where(
                or_(Course.credits < MIN_CREDITS, Course.credits > MAX_CREDITS)
            ),
        ),
        AuditQuery(
            "student_missing_mandatory", DOMAIN,
            "필수 속성이 비어 있는 학생",
            select(Student.__table__).where(
                or_(
                    Student.first_name.is_(None),
                    Student.last_name.is_(None),
                    Student.email.is_(None),
                    Student.enrollment_date.is_(None),
                )
            ),
        ),
        # 중복
        AuditQuery(
            "duplicate_enrollments", DUPLICATE,
            "같은 학생이 같은 강의에 두 번 이상 등록",
            _duplicates(Enrollment.student_id, Enrollment.course_id),
        ),
    ]

    for model, pk in (
        (Student, Student.student_id),
        (Instructor, Instructor.instructor_id),
        (Course, Course.course_id),
        (Enrollment, Enrollment.enrollment_id),
    ):
        name = model.__tablename__.lower()
        queries.append(
            AuditQuery(
                f"duplicate_{name}_pk", DUPLICATE,
                f"{model.__tablename__} 기본키 중복",
                _duplicates(pk),
            )
        )

    # 논리적 공백
    queries += [
        AuditQuery(
            "courses_without_enrollments", GAP,
            "수강생이 한 명도 없는 강의",
            select(Course.__table__)
            .outerjoin(Enrollment, Course.course_id == Enrollment.course_id)
            .where(Enrollment.enrollment_id.is_(None)),
        ),
        AuditQuery(
            "students_without_enrollments", GAP,
            "수강신청이 하나도 없는 학생",
            select(Student.__table__)
            .outerjoin(Enrollment, Student.student_id == Enrollment.student_id)
            .where(Enrollment.enrollment_id.is_(None)),
        ),
    ]
    return {q.name: q for q in queries}


# ✅ 이름 → 감사 쿼리 (실행 순서 유지)
AUDIT_QUERIES = _build_queries()


def run_audit(db: Session, name: str) -> list[dict[str, Any]]:
    audit = AUDIT_QUERIES.get(name)
    if audit is None:
        raise UnknownAuditError(name)
    rows = db.execute(audit.statement).mappings().all()
    return [dict(row) for row in rows]


def run_all_audits(db: Session) -> AuditReport:
    report = AuditReport()
    for name in AUDIT_QUERIES:
        report.results[name] = run_audit(db, name)

    for name, rows in report.violations.items():
        logger.warning("감사 위반 발견: %s (%d건)", name, len(rows))
    if report.is_consistent:
        logger.info("감사 완료: 무결성 위반 없음")
    return report
