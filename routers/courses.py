from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from database.db import get_db
from models.courses import Course as CourseModel
from models.enrollments import Enrollment as EnrollmentModel
from schemas.courses import CourseCreate, Course
from schemas.common import Pagination, make_meta
from services.integrity import commit_or_raise
from utils.responses import ok, not_found

router = APIRouter(prefix="/courses", tags=["강의"])


def _dump(course: CourseModel) -> dict:
    return Course.model_validate(course).model_dump(mode="json")


# ✅ [CREATE] 강의 개설
#    - 학점 범위 위반(chk_credits), 없는 교수 ID(FK)는 DB가 거부 → 409
@router.post("/", status_code=201)
def create_course(course: CourseCreate, db: Session = Depends(get_db)):
    db_course = CourseModel(**course.model_dump())
    db.add(db_course)
    commit_or_raise(db)
    db.refresh(db_course)
    return ok(_dump(db_course), "강의가 성공적으로 개설되었습니다")


# ✅ [READ] 전체 강의 조회 (페이징)
@router.get("/")
def read_courses(p: Pagination = Depends(), db: Session = Depends(get_db)):
    total = db.query(func.count(CourseModel.course_id)).scalar()
    records = (
        db.query(CourseModel)
        .order_by(CourseModel.course_id)
        .offset(p.offset)
        .limit(p.size)
        .all()
    )
    return ok([_dump(r) for r in records], "전체 강의 조회 완료", meta=make_meta(total, p.page, p.size))


# ✅ [SUMMARY] 강의별 수강생 수
@router.get("/summary")
def course_summary(db: Session = Depends(get_db)):
    rows = (
        db.query(CourseModel.course_id, CourseModel.course_name, func.count(EnrollmentModel.enrollment_id))
        .outerjoin(EnrollmentModel, EnrollmentModel.course_id == CourseModel.course_id)
        .group_by(CourseModel.course_id, CourseModel.course_name)
        .order_by(CourseModel.course_id)
        .all()
    )
    return ok(
        [{"course_id": cid, "course_name": name, "enrolled": cnt} for cid, name, cnt in rows],
        "강의별 수강생 수 조회 성공",
    )


# ✅ [READ] 특정 강의 상세 조회
@router.get("/{course_id}")
def read_course(course_id: int, db: Session = Depends(get_db)):
    course = db.get(CourseModel, course_id)
    if course is None:
        return not_found("강의 정보를 찾을 수 없습니다")
    return ok(_dump(course), "강의 상세 정보 조회 성공")


# ✅ [UPDATE] 특정 강의 정보 수정
@router.put("/{course_id}")
def update_course(course_id: int, updated: CourseCreate, db: Session = Depends(get_db)):
    course = db.get(CourseModel, course_id)
    if course is None:
        return not_found("강의 정보를 찾을 수 없습니다")

    for key, value in updated.model_dump().items():
        setattr(course, key, value)

    commit_or_raise(db)
    db.refresh(course)
    return ok(_dump(course), "강의 정보가 성공적으로 수정되었습니다")


# ✅ [DELETE] 특정 강의 삭제
#    - 해당 강의의 수강신청은 ON DELETE CASCADE로 함께 삭제
@router.delete("/{course_id}")
def delete_course(course_id: int, db: Session = Depends(get_db)):
    course = db.get(CourseModel, course_id)
    if course is None:
        return not_found("강의 정보를 찾을 수 없습니다")

    db.delete(course)
    commit_or_raise(db)
    return ok({"course_id": course_id}, "강의가 성공적으로 삭제되었습니다")
