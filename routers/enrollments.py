from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from database.db import get_db
from models.enrollments import Enrollment as EnrollmentModel
from schemas.enrollments import EnrollmentCreate, Enrollment, GradeUpdate
from schemas.common import Pagination, make_meta
from services.integrity import commit_or_raise
from utils.responses import ok, not_found

router = APIRouter(prefix="/enrollments", tags=["수강신청"])


def _dump(enrollment: EnrollmentModel) -> dict:
    return Enrollment.model_validate(enrollment).model_dump(mode="json")


# ✅ [CREATE] 수강신청
#    - 같은 강의 중복 신청(uq_student_course), 잘못된 성적(chk_grade),
#      없는 학생/강의(FK)는 DB가 거부 → 409
@router.post("/", status_code=201)
def create_enrollment(enrollment: EnrollmentCreate, db: Session = Depends(get_db)):
    db_enrollment = EnrollmentModel(**enrollment.model_dump())
    db.add(db_enrollment)
    commit_or_raise(db)
    db.refresh(db_enrollment)
    return ok(_dump(db_enrollment), "수강신청이 완료되었습니다")


# ✅ [READ] 전체 수강신청 조회 (페이징, 강의/학생 필터)
@router.get("/")
def read_enrollments(
    course_id: int = None,
    student_id: int = None,
    p: Pagination = Depends(),
    db: Session = Depends(get_db),
):
    query = db.query(EnrollmentModel)
    if course_id is not None:
        query = query.filter(EnrollmentModel.course_id == course_id)
    if student_id is not None:
        query = query.filter(EnrollmentModel.student_id == student_id)

    total = query.with_entities(func.count(EnrollmentModel.enrollment_id)).scalar()
    records = query.order_by(EnrollmentModel.enrollment_id).offset(p.offset).limit(p.size).all()
    return ok([_dump(r) for r in records], "수강신청 목록 조회 완료", meta=make_meta(total, p.page, p.size))


# ✅ [READ] 특정 수강신청 상세 조회
@router.get("/{enrollment_id}")
def read_enrollment(enrollment_id: int, db: Session = Depends(get_db)):
    enrollment = db.get(EnrollmentModel, enrollment_id)
    if enrollment is None:
        return not_found("수강신청 정보를 찾을 수 없습니다")
    return ok(_dump(enrollment), "수강신청 상세 조회 성공")


# ✅ [UPDATE] 수강신청 전체 수정
@router.put("/{enrollment_id}")
def update_enrollment(enrollment_id: int, updated: EnrollmentCreate, db: Session = Depends(get_db)):
    enrollment = db.get(EnrollmentModel, enrollment_id)
    if enrollment is None:
        return not_found("수강신청 정보를 찾을 수 없습니다")

    for key, value in updated.model_dump().items():
        setattr(enrollment, key, value)

    commit_or_raise(db)
    db.refresh(enrollment)
    return ok(_dump(enrollment), "수강신청 정보가 수정되었습니다")


# ✅ [UPDATE] 성적만 입력/수정
@router.patch("/{enrollment_id}/grade")
def update_grade(enrollment_id: int, updated: GradeUpdate, db: Session = Depends(get_db)):
    enrollment = db.get(EnrollmentModel, enrollment_id)
    if enrollment is None:
        return not_found("수강신청 정보를 찾을 수 없습니다")

    enrollment.grade = updated.grade
    commit_or_raise(db)
    db.refresh(enrollment)
    return ok(_dump(enrollment), "성적이 반영되었습니다")


# ✅ [DELETE] 수강 취소
@router.delete("/{enrollment_id}")
def delete_enrollment(enrollment_id: int, db: Session = Depends(get_db)):
    enrollment = db.get(EnrollmentModel, enrollment_id)
    if enrollment is None:
        return not_found("수강신청 정보를 찾을 수 없습니다")

    db.delete(enrollment)
    commit_or_raise(db)
    return ok({"enrollment_id": enrollment_id}, "수강신청이 취소되었습니다")
