"""book_models: 도서 관련 데이터 모델 및 함수 모듈.

도서 데이터 클래스와 MySQL 데이터베이스를 관리하는 함수들을 제공합니다.
"""

from dataclasses import dataclass
from datetime import datetime

from database.connection import fetch_all, fetch_count, fetch_one, transactional


# SQL Injection 방지: 허용된 컬럼명 whitelist
ALLOWED_BOOK_COLUMNS = {"title", "author", "description", "category_id"}

BOOK_SELECT_FIELDS = (
    "id, title, author, description, category_id, user_id, created_at, updated_at"
)


@dataclass(frozen=True)
class Book:
    """도서 데이터 클래스.

    Attributes:
        id: 도서 고유 식별자.
        title: 제목.
        author: 저자.
        description: 소개 (선택).
        category_id: 카테고리 ID.
        user_id: 등록한 사용자 ID.
        created_at: 생성 시간.
        updated_at: 수정 시간.
    """

    id: int
    title: str
    author: str
    description: str | None
    category_id: int
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


def _row_to_book(row: tuple) -> Book:
    """데이터베이스 행을 Book 객체로 변환합니다."""
    return Book(
        id=row[0],
        title=row[1],
        author=row[2],
        description=row[3],
        category_id=row[4],
        user_id=row[5],
        created_at=row[6],
        updated_at=row[7],
    )


def _category_filter(category_id: int | None) -> tuple[str, tuple]:
    if category_id is None:
        return "", ()
    return "WHERE category_id = %s", (category_id,)


async def get_books(
    offset: int, limit: int, category_id: int | None = None
) -> list[Book]:
    """도서 목록을 최신순으로 조회합니다.

    Args:
        offset: 시작 위치.
        limit: 조회할 도서 수.
        category_id: 카테고리 필터 (선택).

    Returns:
        도서 객체 목록.
    """
    where, params = _category_filter(category_id)
    rows = await fetch_all(
        f"""
        SELECT {BOOK_SELECT_FIELDS}
        FROM book
        {where}
        ORDER BY created_at DESC, id DESC
        LIMIT %s OFFSET %s
        """,
        (*params, limit, offset),
    )
    return [_row_to_book(row) for row in rows]


async def get_total_books_count(category_id: int | None = None) -> int:
    """도서 총 개수를 반환합니다."""
    where, params = _category_filter(category_id)
    return await fetch_count(f"SELECT COUNT(*) FROM book {where}", params)


async def get_book_by_id(book_id: int) -> Book | None:
    """ID로 도서를 조회합니다."""
    row = await fetch_one(
        f"SELECT {BOOK_SELECT_FIELDS} FROM book WHERE id = %s", (book_id,)
    )
    return _row_to_book(row) if row else None


async def create_book(
    user_id: int,
    title: str,
    author: str,
    category_id: int,
    description: str | None = None,
) -> Book:
    """새 도서를 생성합니다.

    Returns:
        생성된 도서 객체.
    """
    async with transactional() as cur:
        await cur.execute(
            """
            INSERT INTO book (title, author, description, category_id, user_id)
            VALUES (%s, %s, %s, %s, %s)
            """,
            (title, author, description, category_id, user_id),
        )
        book_id = cur.lastrowid

        await cur.execute(
            f"SELECT {BOOK_SELECT_FIELDS} FROM book WHERE id = %s",
            (book_id,),
        )
        row = await cur.fetchone()
        return _row_to_book(row)


async def update_book(book_id: int, **fields) -> Book | None:
    """도서를 수정합니다.

    값이 None인 필드는 변경하지 않습니다.

    Args:
        book_id: 수정할 도서 ID.
        **fields: 변경할 컬럼과 값 (title, author, description, category_id).

    Returns:
        수정된 도서 객체, 없으면 None.

    Raises:
        ValueError: 허용되지 않은 컬럼명이 포함된 경우.
    """
    changes = {k: v for k, v in fields.items() if v is not None}

    for column_name in changes:
        if column_name not in ALLOWED_BOOK_COLUMNS:
            raise ValueError(f"Invalid column name: {column_name}")

    if not changes:
        return await get_book_by_id(book_id)

    assignments = ", ".join(f"{column} = %s" for column in changes)

    async with transactional() as cur:
        await cur.execute(
            f"UPDATE book SET {assignments} WHERE id = %s",
            (*changes.values(), book_id),
        )

        # 같은 트랜잭션 내에서 수정된 도서 조회
        await cur.execute(
            f"SELECT {BOOK_SELECT_FIELDS} FROM book WHERE id = %s",
            (book_id,),
        )
        row = await cur.fetchone()
        return _row_to_book(row) if row else None


async def delete_book(book_id: int) -> bool:
    """도서를 삭제합니다.

    Returns:
        삭제 성공 여부.
    """
    async with transactional() as cur:
        await cur.execute("DELETE FROM book WHERE id = %s", (book_id,))
        return cur.rowcount > 0
