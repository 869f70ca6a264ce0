"""auth: 인증 및 권한 확인 모듈.

Authorization 헤더의 Bearer Access Token으로 사용자를 인증합니다.
컨트롤러에서 Request 객체를 넘겨 직접 호출합니다.
"""

from fastapi import Request

from dependencies.request_context import get_request_timestamp
from models import user_models
from models.user_models import User
from utils.exceptions import forbidden_error, unauthorized_error
from utils.jwt_utils import decode_access_token

_BEARER_PREFIX = "bearer "


def _extract_bearer_token(request: Request) -> str | None:
    """Authorization 헤더에서 Bearer 토큰을 추출합니다."""
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX):].strip()
    return token or None


async def get_current_user(request: Request) -> User:
    """Access Token에서 현재 사용자를 추출하고 검증합니다.

    Args:
        request: FastAPI Request 객체.

    Returns:
        인증된 사용자 객체.

    Raises:
        HTTPException: 토큰이 없거나 유효하지 않으면 401.
    """
    timestamp = get_request_timestamp(request)

    token = _extract_bearer_token(request)
    if not token:
        raise unauthorized_error("unauthorized", timestamp)

    payload = decode_access_token(token)
    user = await user_models.get_user_by_id(int(payload["sub"]))
    if not user:
        # 토큰 발급 이후 삭제된 사용자
        raise unauthorized_error("unauthorized", timestamp)

    return user


async def require_admin(request: Request) -> User:
    """관리자 권한을 가진 현재 사용자를 반환합니다.

    Raises:
        HTTPException: 인증 실패 시 401, 관리자가 아니면 403.
    """
    user = await get_current_user(request)
    if not user.is_admin:
        raise forbidden_error(
            "access",
            get_request_timestamp(request),
            "관리자만 접근할 수 있습니다.",
        )
    return user
