# logging: 요청/응답 로깅 미들웨어
# 요청마다 시작/종료 한 줄씩 "api" 로거에 남기고 X-Process-Time 헤더를 붙인다.

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("api")
logger.setLevel(logging.INFO)

if not logger.handlers:
    _console_handler = logging.StreamHandler()
    _console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_console_handler)


def _status_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    요청/응답 로깅 미들웨어

    4xx는 WARNING, 5xx는 ERROR 레벨로 기록한다.
    하위 계층에서 예외가 전파되면 처리 시간과 함께 기록한 뒤 다시 던진다.
    """

    async def dispatch(self, request: Request, call_next):
        method, path = request.method, request.url.path
        start = time.perf_counter()
        logger.info("-> %s %s", method, path)

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "<- %s %s - 처리 중 예외 - Time: %.3fs",
                method,
                path,
                time.perf_counter() - start,
            )
            raise

        elapsed = time.perf_counter() - start
        logger.log(
            _status_level(response.status_code),
            "<- %s %s - Status: %d - Time: %.3fs",
            method,
            path,
            response.status_code,
            elapsed,
        )
        response.headers["X-Process-Time"] = f"{elapsed:.3f}"
        return response
