"""user_controller: 사용자 관련 컨트롤러 모듈.

사용자 목록 조회, 회원가입 기능을 제공합니다.
"""

from fastapi import Request

from dependencies.auth import require_admin
from dependencies.request_context import get_request_timestamp
from dependencies.request_data import parse_json_body
from schemas.common import create_response, serialize_user
from schemas.user_schemas import CreateUserRequest
from services.user_service import UserService
from utils.jwt_utils import create_access_token


async def get_users(request: Request) -> dict:
    """사용자 목록을 조회합니다. 관리자 전용.

    Args:
        request: FastAPI Request 객체.

    Returns:
        사용자 목록이 포함된 응답 딕셔너리.

    Raises:
        HTTPException: 인증 실패 시 401, 관리자가 아니면 403.
    """
    await require_admin(request)
    timestamp = get_request_timestamp(request)

    users = await UserService.list_users()

    return create_response(
        "USERS_RETRIEVED",
        "사용자 목록 조회에 성공했습니다.",
        data={"users": [serialize_user(user) for user in users]},
        timestamp=timestamp,
    )


async def create_user(request: Request) -> dict:
    """새로운 사용자를 생성합니다 (회원가입).

    가입 직후 바로 API를 사용할 수 있도록 Access Token을 함께 발급합니다.

    Args:
        request: FastAPI Request 객체.

    Returns:
        생성된 사용자 정보와 access_token이 포함된 응답 딕셔너리.

    Raises:
        HTTPException: 이메일/사용자 이름 중복 시 409 Conflict.
    """
    user_data = await parse_json_body(request, CreateUserRequest)
    timestamp = get_request_timestamp(request)

    user = await UserService.create_user(user_data, timestamp)

    return create_response(
        "USER_CREATED",
        "회원가입에 성공했습니다.",
        data={
            "user": serialize_user(user),
            "access_token": create_access_token(user_id=user.id),
        },
        timestamp=timestamp,
    )
