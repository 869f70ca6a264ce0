"""book_service: 도서 관련 비즈니스 로직을 처리하는 서비스."""

from pymysql.err import IntegrityError

from models import book_models, category_models
from models.book_models import Book
from models.user_models import User
from schemas.book_schemas import CreateBookRequest, UpdateBookRequest
from utils.exceptions import bad_request_error, forbidden_error, not_found_error

# MySQL FK 위반 (참조 대상 행 없음) 에러 코드
_NO_REFERENCED_ROW = 1452


def _category_not_found(timestamp: str):
    return bad_request_error(
        "category_not_found", timestamp, "존재하지 않는 카테고리입니다."
    )


class BookService:
    """도서 관리 서비스."""

    @staticmethod
    async def get_books(
        offset: int, limit: int, category_id: int | None = None
    ) -> tuple[list[Book], int, bool]:
        """도서 목록과 페이지네이션 정보 조회."""
        books = await book_models.get_books(offset, limit, category_id=category_id)
        total_count = await book_models.get_total_books_count(category_id=category_id)
        has_more = offset + limit < total_count
        return books, total_count, has_more

    @staticmethod
    async def get_book(book_id: int, timestamp: str) -> Book:
        """ID로 도서 조회 및 존재 확인."""
        book = await book_models.get_book_by_id(book_id)
        if not book:
            raise not_found_error("book", timestamp)
        return book

    @staticmethod
    async def _ensure_category(category_id: int, timestamp: str) -> None:
        if not await category_models.get_category_by_id(category_id):
            raise _category_not_found(timestamp)

    @staticmethod
    async def create_book(
        user: User, book_data: CreateBookRequest, timestamp: str
    ) -> Book:
        """도서 등록."""
        await BookService._ensure_category(book_data.category_id, timestamp)

        # 확인 이후 카테고리가 삭제된 경우 FK 제약으로 감지
        try:
            return await book_models.create_book(
                user_id=user.id,
                title=book_data.title,
                author=book_data.author,
                category_id=book_data.category_id,
                description=book_data.description,
            )
        except IntegrityError as e:
            if e.args[0] != _NO_REFERENCED_ROW:
                raise
            raise _category_not_found(timestamp)

    @staticmethod
    async def update_book(
        book_id: int, user: User, book_data: UpdateBookRequest, timestamp: str
    ) -> Book:
        """도서 수정. 등록자 또는 관리자만 가능합니다."""
        # 1. 존재 확인
        book = await BookService.get_book(book_id, timestamp)

        # 2. 권한 확인
        if not user.is_admin and book.user_id != user.id:
            raise forbidden_error(
                "edit", timestamp, "도서를 등록한 사용자만 수정할 수 있습니다."
            )

        # 3. 변경사항 확인
        if not book_data.has_changes():
            raise bad_request_error("no_changes_provided", timestamp)

        if book_data.category_id is not None:
            await BookService._ensure_category(book_data.category_id, timestamp)

        # 4. DB 업데이트
        try:
            updated_book = await book_models.update_book(
                book_id,
                title=book_data.title,
                author=book_data.author,
                description=book_data.description,
                category_id=book_data.category_id,
            )
        except IntegrityError as e:
            if e.args[0] != _NO_REFERENCED_ROW:
                raise
            raise _category_not_found(timestamp)
        if not updated_book:
            # 확인과 수정 사이에 삭제된 경우
            raise not_found_error("book", timestamp)
        return updated_book

    @staticmethod
    async def delete_book(book_id: int, user: User, timestamp: str) -> None:
        """도서 삭제. 관리자는 등록자 검증을 건너뜁니다."""
        book = await BookService.get_book(book_id, timestamp)

        if not user.is_admin and book.user_id != user.id:
            raise forbidden_error(
                "delete", timestamp, "도서를 등록한 사용자만 삭제할 수 있습니다."
            )

        await book_models.delete_book(book_id)
