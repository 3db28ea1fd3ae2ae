from pydantic import BaseModel, ConfigDict

# ✅ 입력용
#    - 학점 범위(1~6)는 DB의 chk_credits가 검증
class CourseCreate(BaseModel):
    course_name: str                         # 강의명
    credits: int                             # 학점
    instructor_id: int                       # 담당 교수 ID

# ✅ 출력용
class Course(CourseCreate):
    course_id: int

    model_config = ConfigDict(from_attributes=True)
