"""rate_limiter: API 요청 속도 제한 미들웨어.

로그인, 회원가입 브루트포스 방지를 위한 IP 기반 Rate Limiting을 제공합니다.
"""

import asyncio
import ipaddress
import logging
import os
from collections import defaultdict
from datetime import datetime, timedelta

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import settings

logger = logging.getLogger(__name__)

_UNKNOWN_IPS = ("unknown", "0.0.0.0", "")


def is_valid_ip(ip_str: str) -> bool:
    """IPv4/IPv6 주소 형식을 검증합니다."""
    try:
        ipaddress.ip_address(ip_str)
        return True
    except ValueError:
        return False


class RateLimiter:
    """메모리 기반 슬라이딩 윈도우 Rate Limiter.

    키(IP, 경로)별 요청 시각을 추적합니다. 추적 키 수가 max_tracked_keys에
    도달하면 마지막 요청이 가장 오래된 키 10%를 일괄 제거합니다.
    """

    def __init__(self, max_tracked_keys: int | None = None):
        self._requests: dict[str, list[datetime]] = defaultdict(list)
        self._lock = asyncio.Lock()
        self.max_tracked_keys = (
            max_tracked_keys
            if max_tracked_keys is not None
            else settings.RATE_LIMIT_MAX_IPS
        )

    def _evict_oldest(self) -> None:
        eviction_count = max(1, self.max_tracked_keys // 10)
        oldest = sorted(
            self._requests.items(),
            key=lambda item: max(item[1]) if item[1] else datetime.min,
        )
        for key, _ in oldest[:eviction_count]:
            del self._requests[key]
        logger.warning(
            "Rate Limiter 배치 제거: %d개 키 제거 (남은 키: %d개)",
            eviction_count,
            len(self._requests),
        )

    async def is_rate_limited(
        self, key: str, max_requests: int, window_seconds: int
    ) -> tuple[bool, int]:
        """요청이 속도 제한에 걸리는지 확인하고, 허용되면 기록합니다.

        Args:
            key: 추적 키 (보통 클라이언트 IP와 경로).
            max_requests: 윈도우 내 최대 요청 수.
            window_seconds: 시간 윈도우 (초).

        Returns:
            (제한 여부, 남은 요청 수) 튜플.
        """
        async with self._lock:
            if key not in self._requests and len(self._requests) >= self.max_tracked_keys:
                self._evict_oldest()

            now = datetime.now()
            window_start = now - timedelta(seconds=window_seconds)
            recent = [t for t in self._requests[key] if t > window_start]
            self._requests[key] = recent

            if len(recent) >= max_requests:
                return True, 0

            recent.append(now)
            return False, max_requests - len(recent)


# 전역 Rate Limiter 인스턴스
_rate_limiter = RateLimiter()


# (메서드, 경로)별 Rate Limit 설정
RATE_LIMIT_CONFIG = {
    # 인증 관련 - 엄격한 제한 (브루트포스 방지)
    ("POST", "/api/v1/login"): {"max_requests": 5, "window_seconds": 60},
    ("POST", "/api/v1/register"): {"max_requests": 3, "window_seconds": 60},
    # 도서 등록 - 스팸 방지
    ("POST", "/api/v1/books"): {"max_requests": 30, "window_seconds": 60},
}

# 기본 Rate Limit (설정되지 않은 엔드포인트)
DEFAULT_RATE_LIMIT = {"max_requests": 100, "window_seconds": 60}

# "unknown" IP는 더 엄격한 제한 적용
UNKNOWN_IP_MAX_REQUESTS = 10


def get_client_ip(request: Request) -> str:
    """클라이언트 IP를 추출합니다.

    X-Forwarded-For가 있으면 신뢰된 프록시(settings.TRUSTED_PROXIES)를
    오른쪽부터 제거한 첫 IP를 사용합니다. 신뢰된 프록시가 설정되지 않았으면
    가장 왼쪽 IP를 사용합니다. 헤더가 없으면 X-Real-IP, 직접 연결 IP 순으로 확인합니다.

    Returns:
        클라이언트 IP 주소. 추출 실패 시 "unknown".
    """
    x_forwarded_for = request.headers.get("X-Forwarded-For")
    if x_forwarded_for:
        ips = [ip.strip() for ip in x_forwarded_for.split(",")]
        ips = [ip for ip in ips if ip and is_valid_ip(ip)]
        if ips and not settings.TRUSTED_PROXIES:
            return ips[0]
        if ips:
            for ip in reversed(ips):
                if ip not in settings.TRUSTED_PROXIES:
                    return ip
            return ips[0]
        logger.warning("X-Forwarded-For 헤더에 유효한 IP 없음: %s", x_forwarded_for)

    x_real_ip = request.headers.get("X-Real-IP")
    if x_real_ip and is_valid_ip(x_real_ip.strip()):
        return x_real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate Limiting 미들웨어.

    GET/HEAD/OPTIONS와 헬스 체크는 제한하지 않습니다.
    """

    async def dispatch(self, request: Request, call_next):
        # 테스트 환경에서는 Rate Limit 적용 안 함
        if os.environ.get("TESTING") == "true":
            return await call_next(request)

        if request.method in ("GET", "HEAD", "OPTIONS") or request.url.path == "/health":
            return await call_next(request)

        client_ip = get_client_ip(request)
        path = request.url.path.rstrip("/") or "/"
        config = RATE_LIMIT_CONFIG.get((request.method, path), DEFAULT_RATE_LIMIT)

        max_requests = config["max_requests"]
        if client_ip in _UNKNOWN_IPS:
            max_requests = min(max_requests, UNKNOWN_IP_MAX_REQUESTS)

        is_limited, remaining = await _rate_limiter.is_rate_limited(
            key=f"{client_ip} {request.method} {path}",
            max_requests=max_requests,
            window_seconds=config["window_seconds"],
        )

        if is_limited:
            logger.warning("Rate limit 초과: %s %s %s", client_ip, request.method, path)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "too_many_requests",
                    "message": "요청이 너무 많습니다. 잠시 후 다시 시도해주세요.",
                    "retry_after_seconds": config["window_seconds"],
                },
                headers={
                    "Retry-After": str(config["window_seconds"]),
                    "X-RateLimit-Limit": str(max_requests),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)

        return response
