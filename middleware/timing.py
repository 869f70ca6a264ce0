# timing: 요청 타이밍 미들웨어
# 각 요청에 타임스탬프를 주입하여 일관된 시간 정보를 제공합니다.

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from utils.formatters import utc_now


class TimingMiddleware(BaseHTTPMiddleware):
    """
    요청 타이밍 미들웨어

    요청이 들어온 UTC 시각을 request.state.request_time에 저장합니다.
    컨트롤러와 예외 핸들러는 이 값으로 응답 timestamp를 만듭니다.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.request_time = utc_now()
        return await call_next(request)
