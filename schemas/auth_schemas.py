"""auth_schemas: 로그인 요청 스키마."""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """로그인 요청 모델.

    비밀번호 형식은 회원가입 시에만 검사하고, 여기서는 비어있지 않은지만 확인합니다.
    """

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
