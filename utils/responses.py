"""
utils/responses.py

- 라우터 공통 응답 포맷
  성공: {"success": True, "data": ..., "message": ...}
  실패: {"success": False, "error": {"code": ..., "message": ...}}
"""

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from schemas.common import MetaInfo


def ok(data: Any, message: str, meta: Optional[MetaInfo] = None) -> dict:
    body = {"success": True, "data": data, "message": message}
    if meta is not None:
        body["meta"] = meta.model_dump()
    return body


def not_found(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content=jsonable_encoder({"success": False, "error": {"code": "NOT_FOUND", "message": message}}),
    )
