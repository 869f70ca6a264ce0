"""book_controller: 도서 관련 컨트롤러 모듈.

도서 목록, 상세 조회와 등록, 수정, 삭제 기능을 제공합니다.
"""

from fastapi import HTTPException, Request, status

from dependencies.auth import get_current_user
from dependencies.request_context import get_request_timestamp
from dependencies.request_data import parse_json_body, parse_path_id, parse_query_int
from schemas.book_schemas import CreateBookRequest, UpdateBookRequest
from schemas.common import create_response, serialize_book
from services.book_service import BookService

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


async def get_books(request: Request) -> dict:
    """도서 목록을 조회합니다.

    쿼리 파라미터 offset, limit으로 페이지네이션하고
    category_id로 카테고리를 필터링합니다.

    Args:
        request: FastAPI Request 객체.

    Returns:
        도서 목록과 페이지네이션 정보가 포함된 응답 딕셔너리.

    Raises:
        HTTPException: 잘못된 offset/limit/category_id 값이면 400.
    """
    timestamp = get_request_timestamp(request)

    offset = parse_query_int(request, "offset", 0)
    limit = parse_query_int(request, "limit", DEFAULT_PAGE_SIZE)
    category_id = parse_query_int(request, "category_id")

    if offset < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_offset",
                "message": "시작 위치는 0 이상이어야 합니다.",
                "timestamp": timestamp,
            },
        )

    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_limit",
                "message": f"페이지 크기는 1~{MAX_PAGE_SIZE} 사이여야 합니다.",
                "timestamp": timestamp,
            },
        )

    books, total_count, has_more = await BookService.get_books(
        offset, limit, category_id=category_id
    )

    return create_response(
        "BOOKS_RETRIEVED",
        "도서 목록 조회에 성공했습니다.",
        data={
            "books": [serialize_book(book) for book in books],
            "pagination": {
                "offset": offset,
                "limit": limit,
                "total_count": total_count,
                "has_more": has_more,
            },
        },
        timestamp=timestamp,
    )


async def create_book(request: Request) -> dict:
    """도서를 등록합니다. 로그인 필요."""
    current_user = await get_current_user(request)
    book_data = await parse_json_body(request, CreateBookRequest)
    timestamp = get_request_timestamp(request)

    book = await BookService.create_book(current_user, book_data, timestamp)

    return create_response(
        "BOOK_CREATED",
        "도서가 등록되었습니다.",
        data={"book": serialize_book(book)},
        timestamp=timestamp,
    )


async def get_book(request: Request, id: str) -> dict:
    """도서 상세 정보를 조회합니다.

    Raises:
        HTTPException: 잘못된 ID면 400, 도서가 없으면 404.
    """
    book_id = parse_path_id(id, "book", request)
    timestamp = get_request_timestamp(request)

    book = await BookService.get_book(book_id, timestamp)

    return create_response(
        "BOOK_RETRIEVED",
        "도서 조회에 성공했습니다.",
        data={"book": serialize_book(book)},
        timestamp=timestamp,
    )


async def update_book(request: Request, id: str) -> dict:
    """도서 정보를 수정합니다. PUT과 PATCH가 모두 이 핸들러로 연결됩니다.

    Raises:
        HTTPException: 변경 사항이 없으면 400, 권한이 없으면 403, 도서가 없으면 404.
    """
    current_user = await get_current_user(request)
    book_id = parse_path_id(id, "book", request)
    book_data = await parse_json_body(request, UpdateBookRequest)
    timestamp = get_request_timestamp(request)

    book = await BookService.update_book(book_id, current_user, book_data, timestamp)

    return create_response(
        "BOOK_UPDATED",
        "도서 정보가 수정되었습니다.",
        data={"book": serialize_book(book)},
        timestamp=timestamp,
    )


async def delete_book(request: Request, id: str) -> dict:
    """도서를 삭제합니다.

    Raises:
        HTTPException: 권한이 없으면 403, 도서가 없으면 404.
    """
    current_user = await get_current_user(request)
    book_id = parse_path_id(id, "book", request)
    timestamp = get_request_timestamp(request)

    await BookService.delete_book(book_id, current_user, timestamp)

    return create_response(
        "BOOK_DELETED", "도서가 삭제되었습니다.", timestamp=timestamp
    )
