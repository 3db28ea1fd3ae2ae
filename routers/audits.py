from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session
from database.db import get_db
from services.audits import AUDIT_QUERIES, UnknownAuditError, run_all_audits, run_audit
from utils.responses import ok, not_found

router = APIRouter(prefix="/audits", tags=["무결성 감사"])


# ✅ [READ] 감사 쿼리 목록
@router.get("/catalog")
def list_audits():
    return ok(
        [
            {"name": a.name, "category": a.category, "description": a.description}
            for a in AUDIT_QUERIES.values()
        ],
        "감사 쿼리 목록 조회 성공",
    )


# ✅ [AUDIT] 전체 감사 실행
#    - is_consistent=False 이면 고아/도메인/중복 위반이 존재
@router.get("/")
def audit_all(db: Session = Depends(get_db)):
    report = run_all_audits(db)
    return ok(jsonable_encoder(report.to_dict()), "전체 무결성 감사 완료")


# ✅ [AUDIT] 단일 감사 실행
@router.get("/{name}")
def audit_one(name: str, db: Session = Depends(get_db)):
    try:
        rows = run_audit(db, name)
    except UnknownAuditError:
        return not_found(f"알 수 없는 감사 쿼리: {name}")
    return ok(
        {"name": name, "category": AUDIT_QUERIES[name].category, "rows": jsonable_encoder(rows)},
        f"감사 '{name}' 실행 완료",
    )
