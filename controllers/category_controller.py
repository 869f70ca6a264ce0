"""category_controller: 카테고리 관련 컨트롤러 모듈."""

from fastapi import Request
from pymysql.err import IntegrityError

from dependencies.auth import require_admin
from dependencies.request_context import get_request_timestamp
from dependencies.request_data import parse_json_body, parse_path_id
from models import category_models
from schemas.category_schemas import CreateCategoryRequest
from schemas.common import create_response, serialize_category
from utils.exceptions import conflict_error, in_use_error, not_found_error

# MySQL 에러 코드
_DUPLICATE_ENTRY = 1062
_ROW_IS_REFERENCED = 1451


async def get_categories(request: Request) -> dict:
    """카테고리 목록을 조회합니다. 인증 불필요."""
    timestamp = get_request_timestamp(request)

    categories = await category_models.get_all_categories()

    return create_response(
        "CATEGORIES_RETRIEVED",
        "카테고리 목록 조회에 성공했습니다.",
        data={"categories": [serialize_category(cat) for cat in categories]},
        timestamp=timestamp,
    )


async def create_category(request: Request) -> dict:
    """카테고리를 생성합니다. 관리자 전용.

    Raises:
        HTTPException: 같은 이름의 카테고리가 있으면 409.
    """
    await require_admin(request)
    category_data = await parse_json_body(request, CreateCategoryRequest)
    timestamp = get_request_timestamp(request)

    if await category_models.get_category_by_name(category_data.name):
        raise conflict_error("category", timestamp, "이미 존재하는 카테고리입니다.")

    try:
        category = await category_models.create_category(category_data.name)
    except IntegrityError as e:
        if e.args[0] != _DUPLICATE_ENTRY:
            raise
        raise conflict_error("category", timestamp, "이미 존재하는 카테고리입니다.")

    return create_response(
        "CATEGORY_CREATED",
        "카테고리가 생성되었습니다.",
        data={"category": serialize_category(category)},
        timestamp=timestamp,
    )


async def delete_category(request: Request, id: str) -> dict:
    """카테고리를 삭제합니다. 관리자 전용.

    도서가 남아있는 카테고리는 삭제할 수 없습니다.

    Raises:
        HTTPException: 잘못된 ID면 400, 없으면 404, 도서가 있으면 409.
    """
    await require_admin(request)
    category_id = parse_path_id(id, "category", request)
    timestamp = get_request_timestamp(request)

    if not await category_models.get_category_by_id(category_id):
        raise not_found_error("category", timestamp)

    if await category_models.count_books_in_category(category_id) > 0:
        raise in_use_error(
            "category", timestamp, "도서가 등록된 카테고리는 삭제할 수 없습니다."
        )

    try:
        await category_models.delete_category(category_id)
    except IntegrityError as e:
        # 확인 이후 도서가 등록된 경우 FK 제약으로 감지
        if e.args[0] != _ROW_IS_REFERENCED:
            raise
        raise in_use_error(
            "category", timestamp, "도서가 등록된 카테고리는 삭제할 수 없습니다."
        )

    return create_response(
        "CATEGORY_DELETED", "카테고리가 삭제되었습니다.", timestamp=timestamp
    )
