from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from database.db import get_db
from models.students import Student as StudentModel
from models.enrollments import Enrollment as EnrollmentModel
from schemas.students import StudentCreate, Student
from schemas.enrollments import Enrollment
from schemas.common import Pagination, make_meta
from services.integrity import commit_or_raise
from utils.responses import ok, not_found

router = APIRouter(prefix="/students", tags=["학생"])


def _dump(student: StudentModel) -> dict:
    return Student.model_validate(student).model_dump(mode="json")


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 학생 등록
#    - 이메일 중복은 DB의 uq_student_email이 거부 → 409
@router.post("/", status_code=201)
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    db_student = StudentModel(**student.model_dump())
    db.add(db_student)
    commit_or_raise(db)
    db.refresh(db_student)
    return ok(_dump(db_student), "학생이 성공적으로 등록되었습니다")


# ✅ [READ] 전체 학생 조회 (페이징)
@router.get("/")
def read_students(p: Pagination = Depends(), db: Session = Depends(get_db)):
    total = db.query(func.count(StudentModel.student_id)).scalar()
    records = (
        db.query(StudentModel)
        .order_by(StudentModel.student_id)
        .offset(p.offset)
        .limit(p.size)
        .all()
    )
    return ok([_dump(r) for r in records], "전체 학생 조회 완료", meta=make_meta(total, p.page, p.size))


# ==========================================================
# [2단계] 완전 동적 라우터 (개별 조회/수정/삭제)
# ==========================================================

# ✅ [READ] 특정 학생 상세 조회
@router.get("/{student_id}")
def read_student(student_id: int, db: Session = Depends(get_db)):
    student = db.get(StudentModel, student_id)
    if student is None:
        return not_found("학생 정보를 찾을 수 없습니다")
    return ok(_dump(student), "학생 상세 정보 조회 성공")


# ✅ [READ] 특정 학생의 수강신청 목록
@router.get("/{student_id}/enrollments")
def read_student_enrollments(student_id: int, db: Session = Depends(get_db)):
    student = db.get(StudentModel, student_id)
    if student is None:
        return not_found("학생 정보를 찾을 수 없습니다")
    records = (
        db.query(EnrollmentModel)
        .filter(EnrollmentModel.student_id == student_id)
        .order_by(EnrollmentModel.enrollment_id)
        .all()
    )
    return ok(
        [Enrollment.model_validate(r).model_dump(mode="json") for r in records],
        f"학생 ID {student_id} 수강신청 목록 조회 성공",
    )


# ✅ [UPDATE] 특정 학생 정보 수정
@router.put("/{student_id}")
def update_student(student_id: int, updated: StudentCreate, db: Session = Depends(get_db)):
    student = db.get(StudentModel, student_id)
    if student is None:
        return not_found("학생 정보를 찾을 수 없습니다")

    for key, value in updated.model_dump().items():
        setattr(student, key, value)

    commit_or_raise(db)
    db.refresh(student)
    return ok(_dump(student), "학생 정보가 성공적으로 수정되었습니다")


# ✅ [DELETE] 특정 학생 삭제
#    - 해당 학생의 수강신청은 ON DELETE CASCADE로 함께 삭제
@router.delete("/{student_id}")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student = db.get(StudentModel, student_id)
    if student is None:
        return not_found("학생 정보를 찾을 수 없습니다")

    db.delete(student)
    commit_or_raise(db)
    return ok({"student_id": student_id}, "학생 정보가 성공적으로 삭제되었습니다")
