from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from database.db import get_db
from models.instructors import Instructor as InstructorModel
from models.courses import Course as CourseModel
from schemas.instructors import InstructorCreate, Instructor
from schemas.courses import Course
from schemas.common import Pagination, make_meta
from services.integrity import commit_or_raise
from utils.responses import ok, not_found

router = APIRouter(prefix="/instructors", tags=["교수"])


def _dump(instructor: InstructorModel) -> dict:
    return Instructor.model_validate(instructor).model_dump(mode="json")


# ✅ [CREATE] 교수 등록
@router.post("/", status_code=201)
def create_instructor(instructor: InstructorCreate, db: Session = Depends(get_db)):
    db_instructor = InstructorModel(**instructor.model_dump())
    db.add(db_instructor)
    commit_or_raise(db)
    db.refresh(db_instructor)
    return ok(_dump(db_instructor), "교수가 성공적으로 등록되었습니다")


# ✅ [READ] 전체 교수 조회 (페이징)
@router.get("/")
def read_instructors(p: Pagination = Depends(), db: Session = Depends(get_db)):
    total = db.query(func.count(InstructorModel.instructor_id)).scalar()
    records = (
        db.query(InstructorModel)
        .order_by(InstructorModel.instructor_id)
        .offset(p.offset)
        .limit(p.size)
        .all()
    )
    return ok([_dump(r) for r in records], "전체 교수 조회 완료", meta=make_meta(total, p.page, p.size))


# ✅ [READ] 특정 교수 상세 조회
@router.get("/{instructor_id}")
def read_instructor(instructor_id: int, db: Session = Depends(get_db)):
    instructor = db.get(InstructorModel, instructor_id)
    if instructor is None:
        return not_found("교수 정보를 찾을 수 없습니다")
    return ok(_dump(instructor), "교수 상세 정보 조회 성공")


# ✅ [READ] 특정 교수의 담당 강의 목록
@router.get("/{instructor_id}/courses")
def read_instructor_courses(instructor_id: int, db: Session = Depends(get_db)):
    instructor = db.get(InstructorModel, instructor_id)
    if instructor is None:
        return not_found("교수 정보를 찾을 수 없습니다")
    records = (
        db.query(CourseModel)
        .filter(CourseModel.instructor_id == instructor_id)
        .order_by(CourseModel.course_id)
        .all()
    )
    return ok(
        [Course.model_validate(r).model_dump(mode="json") for r in records],
        f"교수 ID {instructor_id} 담당 강의 조회 성공",
    )


# ✅ [UPDATE] 특정 교수 정보 수정
@router.put("/{instructor_id}")
def update_instructor(instructor_id: int, updated: InstructorCreate, db: Session = Depends(get_db)):
    instructor = db.get(InstructorModel, instructor_id)
    if instructor is None:
        return not_found("교수 정보를 찾을 수 없습니다")

    for key, value in updated.model_dump().items():
        setattr(instructor, key, value)

    commit_or_raise(db)
    db.refresh(instructor)
    return ok(_dump(instructor), "교수 정보가 성공적으로 수정되었습니다")


# ✅ [DELETE] 특정 교수 삭제
#    - 담당 강의가 남아 있으면 fk_course_instructor(RESTRICT)가 거부 → 409
@router.delete("/{instructor_id}")
def delete_instructor(instructor_id: int, db: Session = Depends(get_db)):
    instructor = db.get(InstructorModel, instructor_id)
    if instructor is None:
        return not_found("교수 정보를 찾을 수 없습니다")

    db.delete(instructor)
    commit_or_raise(db)
    return ok({"instructor_id": instructor_id}, "교수 정보가 성공적으로 삭제되었습니다")
