from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from database.db import Base, TABLE_OPTIONS

MIN_CREDITS = 1
MAX_CREDITS = 6


class Course(Base):
    __tablename__ = "Course"  # 강의 정보 테이블

    course_id = Column(Integer, primary_key=True, autoincrement=True)   # 강의 고유 ID (PK)
    course_name = Column(String(100), nullable=False)                  # 강의명 (예: Database Systems)
    credits = Column(Integer, nullable=False)                          # 학점 (1~6)

    # ✅ 담당 교수 ID (FK)
    #    - 교수 ID 변경 시 CASCADE, 교수 삭제는 RESTRICT
    instructor_id = Column(
        Integer,
        ForeignKey(
            "Instructor.instructor_id",
            name="fk_course_instructor",
            onupdate="CASCADE",
            ondelete="RESTRICT",
        ),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(f"credits BETWEEN {MIN_CREDITS} AND {MAX_CREDITS}", name="chk_credits"),
        Index("idx_course_instructor", "instructor_id"),
        TABLE_OPTIONS,
    )

    # ==========================================================
    # [관계 설정]
    # ==========================================================

    # ✅ 담당 교수와의 관계 (N:1)
    instructor = relationship("Instructor", back_populates="courses")

    # ✅ 수강신청 목록 (1:N), 강의 삭제 시 DB CASCADE
    enrollments = relationship(
        "Enrollment",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Course {self.course_id} {self.course_name} ({self.credits})>"
