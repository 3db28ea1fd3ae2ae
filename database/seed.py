import logging
from datetime import date

from sqlalchemy.orm import Session

from models.students import Student
from models.instructors import Instructor
from models.courses import Course
from models.enrollments import Enrollment
from services.integrity import commit_or_raise

logger = logging.getLogger(__name__)

SAMPLE_STUDENT = {
    "first_name": "John",
    "last_name": "Doe",
    "email": "john@uni.edu",
    "enrollment_date": date(2023, 9, 1),
}
SAMPLE_INSTRUCTOR = {
    "first_name": "Alice",
    "last_name": "Smith",
    "department": "Computer Science",
}
SAMPLE_COURSE = {"course_name": "Database Systems", "credits": 3}
SAMPLE_ENROLLMENT = {"enrollment_date": date(2024, 1, 10), "grade": "A"}


def seed_sample_data(db: Session) -> dict:
    """
    테이블별 샘플 1건 입력 (학생 → 교수 → 강의 → 수강신청 순).
    샘플 학생 이메일이 이미 있으면 아무것도 하지 않고 빈 dict 반환.
    """
    exists = db.query(Student).filter(Student.email == SAMPLE_STUDENT["email"]).first()
    if exists is not None:
        logger.info("샘플 데이터가 이미 존재함 → 건너뜀 (student_id=%s)", exists.student_id)
        return {}

    student = Student(**SAMPLE_STUDENT)
    instructor = Instructor(**SAMPLE_INSTRUCTOR)
    course = Course(**SAMPLE_COURSE, instructor=instructor)
    enrollment = Enrollment(**SAMPLE_ENROLLMENT, student=student, course=course)

    db.add_all([student, instructor, course, enrollment])
    commit_or_raise(db)

    logger.info(
        "✅ 샘플 데이터 입력 완료: student=%s instructor=%s course=%s enrollment=%s",
        student.student_id, instructor.instructor_id, course.course_id, enrollment.enrollment_id,
    )
    return {
        "student": student,
        "instructor": instructor,
        "course": course,
        "enrollment": enrollment,
    }
