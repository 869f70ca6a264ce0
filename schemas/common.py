"""common: 공통 응답 유틸리티 모듈.

API 응답 생성 및 공통 데이터 변환 함수를 정의합니다.
"""

from typing import Any

from utils.formatters import format_datetime, utc_now


def create_response(
    code: str,
    message: str,
    data: dict[str, Any] | None = None,
    timestamp: str | None = None,
) -> dict[str, Any]:
    """표준 API 응답 딕셔너리를 생성합니다.

    Args:
        code: 응답 코드 (예: "SUCCESS", "BOOK_CREATED").
        message: 사용자에게 표시할 메시지.
        data: 응답 데이터 (기본값: 빈 딕셔너리).
        timestamp: 타임스탬프 (기본값: 현재 시간).

    Returns:
        표준 형식의 응답 딕셔너리.
    """
    return {
        "code": code,
        "message": message,
        "data": data if data is not None else {},
        "errors": [],
        "timestamp": timestamp or format_datetime(utc_now()),
    }


def serialize_user(user) -> dict[str, Any]:
    """User 객체를 API 응답용 딕셔너리로 변환합니다.

    비밀번호 해시는 포함하지 않습니다.
    """
    return {
        "user_id": user.id,
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "created_at": format_datetime(user.created_at),
    }


def serialize_category(category) -> dict[str, Any]:
    """Category 객체를 API 응답용 딕셔너리로 변환합니다."""
    return {
        "category_id": category.id,
        "name": category.name,
        "created_at": format_datetime(category.created_at),
    }


def serialize_book(book) -> dict[str, Any]:
    """Book 객체를 API 응답용 딕셔너리로 변환합니다."""
    return {
        "book_id": book.id,
        "title": book.title,
        "author": book.author,
        "description": book.description,
        "category_id": book.category_id,
        "user_id": book.user_id,
        "created_at": format_datetime(book.created_at),
        "updated_at": format_datetime(book.updated_at),
    }
