from typing import Optional
from pydantic import BaseModel

# ✅ 인기 강의 TOP N 항목
class PopularCourse(BaseModel):
    course_id: int
    course_name: str
    total_students: int

# ✅ 강의별 평점 항목 (전원 미채점이면 None)
class CourseGPA(BaseModel):
    course_id: int
    course_name: str
    course_gpa: Optional[float] = None
