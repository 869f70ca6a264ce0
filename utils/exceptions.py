"""exceptions: API 에러 응답 생성 헬퍼 모듈.

모든 헬퍼는 HTTPException을 "생성"만 하며, 호출하는 쪽에서 raise 합니다.
detail은 항상 {"error", "timestamp", "message"(선택)} 형식입니다.

    raise not_found_error("book", timestamp)
    # 404 {"detail": {"error": "book_not_found", "timestamp": "..."}}
"""

from fastapi import HTTPException, status


def _api_error(
    status_code: int,
    error: str,
    timestamp: str,
    message: str | None = None,
    headers: dict[str, str] | None = None,
) -> HTTPException:
    detail = {"error": error, "timestamp": timestamp}
    if message:
        detail["message"] = message
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


def bad_request_error(
    error_code: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """400 Bad Request. error_code를 그대로 사용합니다 (예: 'invalid_book_id')."""
    return _api_error(status.HTTP_400_BAD_REQUEST, error_code, timestamp, message)


def unauthorized_error(error_code: str, timestamp: str) -> HTTPException:
    """401 Unauthorized. Bearer 인증 챌린지 헤더를 포함합니다."""
    return _api_error(
        status.HTTP_401_UNAUTHORIZED,
        error_code,
        timestamp,
        headers={"WWW-Authenticate": "Bearer"},
    )


def forbidden_error(
    action: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """403 Forbidden.

    Args:
        action: 거부된 동작 (예: 'edit', 'delete', 'access').
            에러 코드는 not_authorized_to_<action>이 됩니다.
    """
    return _api_error(
        status.HTTP_403_FORBIDDEN, f"not_authorized_to_{action}", timestamp, message
    )


def not_found_error(resource: str, timestamp: str) -> HTTPException:
    """404 Not Found. 에러 코드는 <resource>_not_found."""
    return _api_error(status.HTTP_404_NOT_FOUND, f"{resource}_not_found", timestamp)


def conflict_error(
    resource: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """409 Conflict (중복). 에러 코드는 <resource>_already_exists."""
    return _api_error(
        status.HTTP_409_CONFLICT, f"{resource}_already_exists", timestamp, message
    )


def in_use_error(
    resource: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """409 Conflict (참조 중). 에러 코드는 <resource>_in_use."""
    return _api_error(
        status.HTTP_409_CONFLICT, f"{resource}_in_use", timestamp, message
    )
