from datetime import date
from pydantic import BaseModel, ConfigDict

# ✅ 입력용 (POST/PUT 등)
class StudentCreate(BaseModel):
    first_name: str                          # 이름
    last_name: str                           # 성
    email: str                               # 이메일 (유일)
    enrollment_date: date                    # 입학일

# ✅ 전체 출력용 (GET, 상세조회 등)
class Student(StudentCreate):
    student_id: int

    model_config = ConfigDict(from_attributes=True)
