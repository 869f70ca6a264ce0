"""book_schemas: 도서 관련 Pydantic 모델 모듈.

도서 등록, 수정 요청 스키마를 정의합니다.
"""

from pydantic import BaseModel, Field, field_validator


def _strip_required(v: str, label: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{label}은(는) 공백일 수 없습니다.")
    return v


class CreateBookRequest(BaseModel):
    """도서 등록 요청 모델.

    Attributes:
        title: 제목 (1~200자).
        author: 저자 (1~100자).
        description: 소개 (선택, 최대 5000자).
        category_id: 카테고리 ID.
    """

    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=5000)
    category_id: int = Field(..., ge=1)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """제목의 앞뒤 공백을 제거하고 검증합니다."""
        return _strip_required(v, "제목")

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: str) -> str:
        """저자의 앞뒤 공백을 제거하고 검증합니다."""
        return _strip_required(v, "저자")


class UpdateBookRequest(BaseModel):
    """도서 수정 요청 모델.

    PUT, PATCH 모두 부분 수정으로 처리하며, 전달되지 않은 필드는 유지됩니다.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    author: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=5000)
    category_id: int | None = Field(None, ge=1)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return _strip_required(v, "제목")

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return _strip_required(v, "저자")

    def has_changes(self) -> bool:
        """변경할 필드가 하나라도 있는지 확인합니다."""
        return any(
            v is not None
            for v in (self.title, self.author, self.description, self.category_id)
        )
