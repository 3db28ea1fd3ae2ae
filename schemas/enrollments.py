from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict

# ✅ 입력용
#    - 성적 값(A~F)과 중복 등록 여부는 DB 제약조건(chk_grade, uq_student_course)이 검증
class EnrollmentCreate(BaseModel):
    student_id: int                          # 학생 ID
    course_id: int                           # 강의 ID
    enrollment_date: date                    # 수강신청일
    grade: Optional[str] = None              # 성적 (미채점이면 None)

# ✅ 성적 입력/수정 전용
class GradeUpdate(BaseModel):
    grade: Optional[str] = None

# ✅ 출력용
class Enrollment(EnrollmentCreate):
    enrollment_id: int

    model_config = ConfigDict(from_attributes=True)
