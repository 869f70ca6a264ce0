# category_schemas: 카테고리 관련 Pydantic 모델

from pydantic import BaseModel, Field, field_validator


# 카테고리 생성 요청
class CreateCategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("카테고리 이름은 공백일 수 없습니다.")
        return v
