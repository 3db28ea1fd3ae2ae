"""Constraint error classification and the must-fail statements."""

from unittest.mock import MagicMock

import pymysql
import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from models.courses import Course
from models.enrollments import Enrollment
from services.integrity import (
    NEGATIVE_CHECKS,
    ConstraintViolation,
    classify_integrity_error,
    commit_or_raise,
    run_negative_checks,
)


@pytest.mark.parametrize(
    "detail, expected",
    [
        ("UNIQUE constraint failed: Enrollment.student_id, Enrollment.course_id", "uq_student_course"),
        ("UNIQUE constraint failed: Student.email", "uq_student_email"),
        ("CHECK constraint failed: chk_grade", "chk_grade"),
        ("CHECK constraint failed: chk_credits", "chk_credits"),
        ("FOREIGN KEY constraint failed", "foreign_key"),
        ("NOT NULL constraint failed: Student.email", "not_null"),
        # MySQL
        ("(1062, \"Duplicate entry '1-1' for key 'Enrollment.uq_student_course'\")", "uq_student_course"),
        ("(3819, \"Check constraint 'chk_credits' is violated.\")", "chk_credits"),
        (
            "(1451, 'Cannot delete or update a parent row: a foreign key constraint fails "
            "(`university_db`.`Course`, CONSTRAINT `fk_course_instructor` FOREIGN KEY (`instructor_id`) "
            "REFERENCES `Instructor` (`instructor_id`) ON DELETE RESTRICT ON UPDATE CASCADE)')",
            "fk_course_instructor",
        ),
        ("(1048, \"Column 'first_name' cannot be null\")", "not_null"),
        ("something else entirely", "unknown"),
    ],
)
def test_classify_integrity_error(detail, expected):
    assert classify_integrity_error(detail) == expected


def test_negative_checks_all_rejected(seeded_db):
    assert set(NEGATIVE_CHECKS) == {"duplicate_enrollment", "invalid_grade", "invalid_credits"}
    assert run_negative_checks(seeded_db) == {
        "duplicate_enrollment": True,
        "invalid_grade": True,
        "invalid_credits": True,
    }


def test_negative_checks_leave_state_unchanged(seeded_db):
    run_negative_checks(seeded_db)
    assert seeded_db.query(Enrollment).count() == 1
    assert seeded_db.query(Course).count() == 1
    assert seeded_db.get(Enrollment, 1).grade == "A"


# ==========================================================
# MySQL 8: CHECK 위반(3819)은 OperationalError로 올라옴
# ==========================================================

def _mysql_error(errno, message):
    """PyMySQL 예외를 SQLAlchemy가 감싸는 방식 그대로 재현."""
    orig = pymysql.err.OperationalError(errno, message)
    return DBAPIError.instance("INSERT INTO Enrollment ...", {}, orig, pymysql.err.Error)


def test_mysql_check_error_is_operational_not_integrity():
    wrapped = _mysql_error(3819, "Check constraint 'chk_grade' is violated.")
    assert isinstance(wrapped, OperationalError)
    assert not isinstance(wrapped, IntegrityError)


def test_commit_or_raise_translates_mysql_check_violation():
    db = MagicMock()
    db.commit.side_effect = _mysql_error(3819, "Check constraint 'chk_grade' is violated.")

    with pytest.raises(ConstraintViolation) as exc_info:
        commit_or_raise(db)

    assert exc_info.value.constraint == "chk_grade"
    db.rollback.assert_called_once()


def test_commit_or_raise_reraises_other_database_errors():
    db = MagicMock()
    db.commit.side_effect = _mysql_error(2013, "Lost connection to MySQL server during query")

    with pytest.raises(OperationalError):
        commit_or_raise(db)
    db.rollback.assert_called_once()


def test_negative_checks_count_mysql_check_errors_as_rejected():
    db = MagicMock()
    db.execute.side_effect = [
        _mysql_error(3819, "Check constraint 'chk_grade' is violated."),
        _mysql_error(3819, "Check constraint 'chk_grade' is violated."),
        _mysql_error(3819, "Check constraint 'chk_credits' is violated."),
    ]

    assert run_negative_checks(db) == {
        "duplicate_enrollment": True,
        "invalid_grade": True,
        "invalid_credits": True,
    }
    assert db.rollback.call_count == 3


def test_negative_checks_reraise_other_database_errors():
    db = MagicMock()
    db.execute.side_effect = _mysql_error(2013, "Lost connection to MySQL server during query")

    with pytest.raises(OperationalError):
        run_negative_checks(db)
    db.rollback.assert_called_once()
