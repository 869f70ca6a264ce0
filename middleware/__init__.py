"""middleware: HTTP 미들웨어 패키지.

main.py에서 등록 순서의 역순으로 실행됩니다.
TimingMiddleware가 가장 안쪽에서 request.state.request_time을 기록하고,
LoggingMiddleware와 RateLimitMiddleware가 그 바깥을 감쌉니다.
"""

from .timing import TimingMiddleware
from .logging import LoggingMiddleware
from .rate_limiter import RateLimitMiddleware

__all__ = ["TimingMiddleware", "LoggingMiddleware", "RateLimitMiddleware"]
