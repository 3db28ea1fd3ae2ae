from sqlalchemy import (
    Column, Integer, Date, CHAR, ForeignKey, UniqueConstraint, CheckConstraint, Index,
)
from sqlalchemy.orm import relationship
from database.db import Base, TABLE_OPTIONS

# 허용 성적 등급 (NULL은 미채점)
GRADES = ("A", "B", "C", "D", "F")


class Enrollment(Base):
    __tablename__ = "Enrollment"  # 수강신청 테이블 (성적 포함 연관 엔티티)

    enrollment_id = Column(Integer, primary_key=True, autoincrement=True)  # 수강신청 고유 ID (PK)
    student_id = Column(
        Integer,
        ForeignKey("Student.student_id", name="fk_enroll_student", ondelete="CASCADE"),
        nullable=False,
    )                                                                      # 학생 ID (FK)
    course_id = Column(
        Integer,
        ForeignKey("Course.course_id", name="fk_enroll_course", ondelete="CASCADE"),
        nullable=False,
    )                                                                      # 강의 ID (FK)
    enrollment_date = Column(Date, nullable=False)                         # 수강신청일
    grade = Column(CHAR(2))                                                # 성적 (A~F, NULL 허용)

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_student_course"),
        CheckConstraint(
            "grade IN (" + ",".join(f"'{g}'" for g in GRADES) + ")",
            name="chk_grade",
        ),
        Index("idx_enrollment_student", "student_id"),
        Index("idx_enrollment_course", "course_id"),
        TABLE_OPTIONS,
    )

    student = relationship("Student", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")

    def __repr__(self):
        return f"<Enrollment student={self.student_id} course={self.course_id} grade={self.grade}>"
