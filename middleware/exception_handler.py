"""exception_handler: 전역 예외 처리 핸들러 모듈.

HTTPException은 FastAPI 기본 핸들러가 {"detail": ...}로 응답합니다.
여기서는 라우트 미일치(404), 요청 검증 실패(422), 처리되지 않은 예외(500)를
같은 형식의 응답으로 변환합니다.
"""

import logging
import uuid
from logging.handlers import RotatingFileHandler

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.config import settings
from core.routing import RouteNotFound
from dependencies.request_context import get_request_timestamp

logger = logging.getLogger("api")

# 500 에러의 traceback만 별도 파일에 남김 (10MB x 5개 로테이션)
error_logger = logging.getLogger("api.error")
error_logger.setLevel(logging.ERROR)
if not error_logger.handlers:
    _file_handler = RotatingFileHandler(
        settings.ERROR_LOG_FILE,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
        delay=True,
    )
    _file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    error_logger.addHandler(_file_handler)


async def route_not_found_exception_handler(
    request: Request, exc: RouteNotFound
) -> JSONResponse:
    """라우트 테이블에 없는 (메서드, 경로) 요청에 404를 반환합니다."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "detail": {
                "error": "route_not_found",
                "method": exc.method,
                "path": exc.path,
                "timestamp": get_request_timestamp(request),
            }
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외를 500 응답으로 변환합니다.

    응답의 trackingID로 error 로그 파일의 traceback을 찾을 수 있습니다.
    DEBUG=False이면 예외 메시지를 응답에 포함하지 않습니다.
    """
    tracking_id = str(uuid.uuid4())

    logger.error(
        "[%s] Unhandled exception: %s %s - %r",
        tracking_id,
        request.method,
        request.url.path,
        exc,
    )
    error_logger.error(
        "[%s] %s %s", tracking_id, request.method, request.url.path, exc_info=exc
    )

    content = {
        "trackingID": tracking_id,
        "error": "Internal Server Error",
        "timestamp": get_request_timestamp(request),
    }
    if settings.DEBUG:
        content["detail"] = str(exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
    )


def _sanitize_error(error: dict) -> dict:
    # field_validator의 ValueError 등 직렬화되지 않는 ctx 값은 문자열로 변환
    sanitized = dict(error)
    if isinstance(sanitized.get("input"), bytes):
        sanitized["input"] = f"<binary data: {len(sanitized['input'])} bytes>"
    if isinstance(sanitized.get("ctx"), dict):
        sanitized["ctx"] = {k: str(v) for k, v in sanitized["ctx"].items()}
    return sanitized


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 본문 검증 실패를 422 응답으로 변환합니다.

    detail은 pydantic 에러 목록 (loc, msg, type 등) 그대로입니다.
    """
    errors = [_sanitize_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "detail": jsonable_encoder(errors),
            "timestamp": get_request_timestamp(request),
        },
    )
