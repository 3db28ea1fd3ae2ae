import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from schemas.common import ErrorDetail, ErrorResponse
from services.integrity import ConstraintViolation

logger = logging.getLogger(__name__)


def add_error_handlers(app: FastAPI):
    # ✅ DB 제약조건 위반 (UNIQUE / CHECK / FK) → 409, 문장 전체가 거부되고 상태는 그대로
    @app.exception_handler(ConstraintViolation)
    async def constraint_violation_handler(request: Request, exc: ConstraintViolation):
        body = ErrorResponse(
            error=ErrorDetail(
                code="CONSTRAINT_VIOLATION",
                message=exc.message,
                constraint=exc.constraint,
            )
        )
        return JSONResponse(status_code=409, content=jsonable_encoder(body))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("처리되지 않은 예외: %s %s", request.method, request.url.path)
        body = ErrorResponse(error=ErrorDetail(code="INTERNAL_ERROR", message=str(exc)))
        return JSONResponse(status_code=500, content=jsonable_encoder(body))
