from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from database.db import Base, TABLE_OPTIONS


class Instructor(Base):
    __tablename__ = "Instructor"  # 교수 정보 테이블

    instructor_id = Column(Integer, primary_key=True, autoincrement=True)  # 교수 고유 ID (PK)
    first_name = Column(String(50), nullable=False)                       # 이름
    last_name = Column(String(50), nullable=False)                        # 성
    department = Column(String(50), nullable=False)                       # 소속 학과

    __table_args__ = (TABLE_OPTIONS,)

    # ✅ 담당 강의 목록 (1:N)
    #    - passive_deletes="all": ORM이 자식 FK를 건드리지 않음 → DB의 RESTRICT가 삭제를 막음
    courses = relationship(
        "Course",
        back_populates="instructor",
        passive_deletes="all",
    )

    def __repr__(self):
        return f"<Instructor {self.instructor_id} {self.first_name} {self.last_name}>"
