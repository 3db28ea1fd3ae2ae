from sqlalchemy import Column, Integer, String, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base, TABLE_OPTIONS


class Student(Base):
    __tablename__ = "Student"  # 학생 기본 정보 테이블

    student_id = Column(Integer, primary_key=True, autoincrement=True)   # 고유 학생 ID (PK, 자동 증가)
    first_name = Column(String(50), nullable=False)                     # 이름
    last_name = Column(String(50), nullable=False)                      # 성
    email = Column(String(100), nullable=False)                         # 이메일 (유일)
    enrollment_date = Column(Date, nullable=False)                      # 입학일

    __table_args__ = (
        UniqueConstraint("email", name="uq_student_email"),
        TABLE_OPTIONS,
    )

    # ==========================================================
    # [관계 설정]
    # ==========================================================

    # ✅ 학생의 수강신청 목록 (1:N)
    #    - 학생 삭제 시 DB의 ON DELETE CASCADE가 수강신청을 지움
    enrollments = relationship(
        "Enrollment",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Student {self.student_id} {self.first_name} {self.last_name}>"
