"""user_service: 사용자 관련 비즈니스 로직을 처리하는 서비스."""

import asyncio
import logging

from pymysql.err import IntegrityError

from models import user_models
from models.user_models import User
from schemas.user_schemas import CreateUserRequest
from utils.exceptions import conflict_error
from utils.password import hash_password

logger = logging.getLogger(__name__)

# MySQL 중복 엔트리 에러 코드
_DUPLICATE_ENTRY = 1062


class UserService:
    """사용자 관리 서비스."""

    @staticmethod
    async def list_users() -> list[User]:
        """전체 사용자 목록 조회."""
        return await user_models.get_all_users()

    @staticmethod
    async def create_user(user_data: CreateUserRequest, timestamp: str) -> User:
        """사용자 생성 (회원가입)."""
        # 1. 이메일 중복 확인
        if await user_models.get_user_by_email(user_data.email):
            raise conflict_error("email", timestamp, "이미 사용 중인 이메일입니다.")

        # 2. 사용자 이름 중복 확인
        if await user_models.get_user_by_username(user_data.username):
            raise conflict_error(
                "username", timestamp, "이미 사용 중인 사용자 이름입니다."
            )

        # 3. 비밀번호 해싱 (bcrypt는 CPU 바운드이므로 스레드에서 수행)
        hashed_password = await asyncio.to_thread(hash_password, user_data.password)

        # 4. 생성 (동시 가입으로 인한 중복은 DB 유니크 제약으로 감지)
        try:
            return await user_models.add_user(
                username=user_data.username,
                email=user_data.email,
                password=hashed_password,
            )
        except IntegrityError as e:
            if e.args[0] == _DUPLICATE_ENTRY:
                raise conflict_error(
                    "user", timestamp, "이미 존재하는 이메일 또는 사용자 이름입니다."
                )
            logger.exception("Unhandled IntegrityError: %s", e)
            raise
