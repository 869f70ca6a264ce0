"""jwt_utils: JWT 생성 및 검증 유틸리티 모듈.

Access Token (HS256 JWT) 발급 및 검증.
"""

from datetime import timedelta

import jwt

from core.config import settings
from utils.exceptions import unauthorized_error
from utils.formatters import format_datetime, utc_now

_JWT_ALGORITHM = "HS256"


def _timestamp() -> str:
    return format_datetime(utc_now())


def create_access_token(user_id: int) -> str:
    """Access Token을 생성합니다 (설정된 만료 시간 적용).

    PII(이메일, 사용자 이름 등)는 포함하지 않습니다.
    JWT는 암호화되지 않으므로, 식별에 필요한 최소 정보(sub)만 담습니다.
    """
    now = utc_now()
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(
            (now + timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MINUTES)).timestamp()
        ),
        "type": "access",
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=_JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Access Token을 디코딩하고 클레임을 반환합니다.

    Raises:
        HTTPException 401: 토큰이 만료되었거나 유효하지 않은 경우.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[_JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise unauthorized_error("token_expired", _timestamp())
    except jwt.PyJWTError:
        raise unauthorized_error("token_invalid", _timestamp())

    if payload.get("type") != "access":
        raise unauthorized_error("token_invalid", _timestamp())

    # sub 클레임 존재 및 정수 변환 가능 여부 검증
    sub = payload.get("sub")
    try:
        int(sub)
    except (ValueError, TypeError):
        raise unauthorized_error("token_invalid", _timestamp())

    return payload
