"""request_data: 요청 본문, 경로 및 쿼리 파라미터 파싱 모듈.

라우트 테이블로 디스패치되는 컨트롤러는 FastAPI의 파라미터 주입을 거치지 않으므로
본문 검증과 ID 변환을 이 모듈의 함수로 직접 수행합니다.
"""

import json
import re
from typing import TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from dependencies.request_context import get_request_timestamp
from utils.exceptions import bad_request_error

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# int()가 허용하는 공백, "+", "_", 비ASCII 숫자는 ID로 받지 않음
_DIGITS = re.compile(r"[0-9]+")
_SIGNED_DIGITS = re.compile(r"-?[0-9]+")


async def parse_json_body(request: Request, schema: type[SchemaT]) -> SchemaT:
    """JSON 본문을 읽어 Pydantic 모델로 검증합니다.

    Args:
        request: FastAPI Request 객체.
        schema: 검증에 사용할 Pydantic 모델 클래스.

    Returns:
        검증된 모델 인스턴스.

    Raises:
        HTTPException: 본문이 올바른 JSON이 아니면 400.
        RequestValidationError: 스키마 검증 실패 시 (422로 변환됨).
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise bad_request_error(
            "invalid_json",
            get_request_timestamp(request),
            "요청 본문이 올바른 JSON 형식이 아닙니다.",
        )

    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False), body=payload)


def parse_path_id(raw_id: str, resource: str, request: Request) -> int:
    """경로 파라미터로 캡처된 ID 문자열을 양의 정수로 변환합니다.

    Raises:
        HTTPException: 정수가 아니거나 1 미만이면 400 (invalid_<resource>_id).
    """
    value = int(raw_id) if _DIGITS.fullmatch(raw_id) else 0
    if value < 1:
        raise bad_request_error(
            f"invalid_{resource}_id", get_request_timestamp(request)
        )
    return value


def parse_query_int(
    request: Request, name: str, default: int | None = None
) -> int | None:
    """쿼리 파라미터를 정수로 변환합니다.

    Raises:
        HTTPException: 정수가 아니면 400 (invalid_<name>).
    """
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return default
    if not _SIGNED_DIGITS.fullmatch(raw):
        raise bad_request_error(f"invalid_{name}", get_request_timestamp(request))
    return int(raw)
