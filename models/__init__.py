"""models: 데이터 클래스 및 데이터 관리 함수 패키지.

사용자, 카테고리, 도서 관련 데이터 모델과 MySQL 데이터베이스 관리 함수를 제공합니다.
"""

from .user_models import (
    User,
    get_all_users,
    get_user_by_id,
    get_user_by_email,
    get_user_by_username,
    add_user,
)

from .category_models import (
    Category,
    get_all_categories,
    get_category_by_id,
    get_category_by_name,
    create_category,
    count_books_in_category,
    delete_category,
)

from .book_models import (
    Book,
    get_books,
    get_total_books_count,
    get_book_by_id,
    create_book,
    update_book,
    delete_book,
)

__all__ = [
    # 사용자 모델
    "User",
    "get_all_users",
    "get_user_by_id",
    "get_user_by_email",
    "get_user_by_username",
    "add_user",
    # 카테고리 모델
    "Category",
    "get_all_categories",
    "get_category_by_id",
    "get_category_by_name",
    "create_category",
    "count_books_in_category",
    "delete_category",
    # 도서 모델
    "Book",
    "get_books",
    "get_total_books_count",
    "get_book_by_id",
    "create_book",
    "update_book",
    "delete_book",
]
