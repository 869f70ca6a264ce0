"""auth_controller: 인증 관련 컨트롤러 모듈.

이메일과 비밀번호로 로그인하여 JWT Access Token을 발급합니다.
"""

import asyncio
import logging

from fastapi import Request

from core.config import settings
from dependencies.request_context import get_request_timestamp
from dependencies.request_data import parse_json_body
from models import user_models
from schemas.auth_schemas import LoginRequest
from schemas.common import create_response, serialize_user
from utils.exceptions import unauthorized_error
from utils.jwt_utils import create_access_token
from utils.password import verify_password

logger = logging.getLogger(__name__)

# 타이밍 공격 방지: 존재하지 않는 사용자에 대해서도 bcrypt 비교를 수행하여 응답 시간 차이로
# 사용자 존재 여부가 노출되지 않도록 함
_TIMING_ATTACK_DUMMY_HASH = (
    "$2b$12$EixZaYVK1fsbw1ZfbX3OXePaWxwKc.60VF.wdz.xGto8.H82o.f2y"
)


async def login(request: Request) -> dict:
    """이메일과 비밀번호를 사용하여 로그인합니다.

    Args:
        request: FastAPI Request 객체.

    Returns:
        access_token과 사용자 정보가 포함된 응답 딕셔너리.

    Raises:
        HTTPException: 인증 실패 시 401 Unauthorized.
    """
    credentials = await parse_json_body(request, LoginRequest)
    timestamp = get_request_timestamp(request)

    user = await user_models.get_user_by_email(credentials.email)

    password_valid = await asyncio.to_thread(
        verify_password,
        credentials.password,
        user.password if user else _TIMING_ATTACK_DUMMY_HASH,
    )

    if not user or not password_valid:
        logger.info("로그인 실패: %s", credentials.email)
        raise unauthorized_error("unauthorized", timestamp)

    return create_response(
        "LOGIN_SUCCESS",
        "로그인에 성공했습니다.",
        data={
            "access_token": create_access_token(user_id=user.id),
            "token_type": "bearer",
            "expires_in": settings.JWT_ACCESS_EXPIRE_MINUTES * 60,
            "user": serialize_user(user),
        },
        timestamp=timestamp,
    )
