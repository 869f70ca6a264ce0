"""user_schemas: 사용자 관련 Pydantic 모델 모듈.

회원가입 요청 스키마를 정의합니다.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
import re

_PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,20}$"
)
_PASSWORD_ERROR = (
    "비밀번호는 대문자, 소문자, 숫자, 특수문자(@, $, !, %, *, ?, &)를 "
    "포함하여 8자 이상 20자 이하여야 합니다."
)

_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,30}$")
_USERNAME_ERROR = (
    "사용자 이름은 3자 이상 30자 이하의 영문, 숫자, 언더바로 구성하여야 합니다."
)


class CreateUserRequest(BaseModel):
    """회원가입 요청 모델.

    Attributes:
        username: 사용자 이름 (3~30자, 영문/숫자/언더바).
        email: 이메일 주소.
        password: 비밀번호 (8~20자, 대/소문자/숫자/특수문자 포함).
    """

    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=20)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """사용자 이름 형식을 검증합니다."""
        if not _USERNAME_PATTERN.fullmatch(v):
            raise ValueError(_USERNAME_ERROR)
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """비밀번호 형식을 검증합니다.

        Raises:
            ValueError: 비밀번호 형식이 올바르지 않은 경우.
        """
        if not _PASSWORD_PATTERN.fullmatch(v):
            raise ValueError(_PASSWORD_ERROR)
        return v
