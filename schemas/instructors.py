from pydantic import BaseModel, ConfigDict

# ✅ 입력용
class InstructorCreate(BaseModel):
    first_name: str                          # 이름
    last_name: str                           # 성
    department: str                          # 소속 학과

# ✅ 출력용
class Instructor(InstructorCreate):
    instructor_id: int

    model_config = ConfigDict(from_attributes=True)
