from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from coursehub.core.exceptions import AppError
from coursehub.schemas.response import ErrorResponse, ErrorDetail
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)

def _get_error_code(status_code: int) -> str:
    code_map = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_SERVER_ERROR",
    }
    return code_map.get(status_code, f"HTTP_{status_code}")

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())

def _error_response(request: Request, request_id: str, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    error_response = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=request.url.path,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error_response),
        headers={"X-Request-ID": request_id},
    )

async def app_error_handler(request: Request, exc: AppError):
    request_id = _request_id(request)
    if exc.status_code >= 500:
        logger.error(f"[{request_id}] {exc.code}: {exc.message}", extra={"request_id": request_id})
    else:
        logger.warning(f"[{request_id}] HTTP {exc.status_code} {exc.code}: {exc.message}", extra={"request_id": request_id})
    return _error_response(request, request_id, exc.status_code, exc.code, exc.message, exc.details)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = _request_id(request)
    errors = jsonable_encoder(exc.errors())
    logger.warning(f"[{request_id}] Validation error: {errors}", extra={"request_id": request_id})
    return _error_response(
        request, request_id, 422, "VALIDATION_ERROR", "Request validation failed",
        {"validation_errors": errors},
    )

async def global_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)

    if isinstance(exc, HTTPException):
        logger.warning(f"[{request_id}] HTTP {exc.status_code}: {exc.detail}", extra={"request_id": request_id})
        return _error_response(
            request, request_id, exc.status_code, _get_error_code(exc.status_code),
            exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        )

    logger.error(f"[{request_id}] Unhandled exception: {exc}", exc_info=True, extra={"request_id": request_id})
    return _error_response(
        request, request_id, 500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred",
        {"error_type": type(exc).__name__},
    )
