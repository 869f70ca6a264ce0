"""category_models: 카테고리 관련 데이터 모델 및 함수 모듈."""

from dataclasses import dataclass
from datetime import datetime

from database.connection import fetch_all, fetch_count, fetch_one, transactional


CATEGORY_SELECT_FIELDS = "id, name, created_at"


@dataclass(frozen=True)
class Category:
    """카테고리 데이터 클래스."""

    id: int
    name: str
    created_at: datetime | None = None


def _row_to_category(row: tuple) -> Category:
    return Category(id=row[0], name=row[1], created_at=row[2])


async def get_all_categories() -> list[Category]:
    """모든 카테고리를 이름순으로 조회합니다."""
    rows = await fetch_all(
        f"SELECT {CATEGORY_SELECT_FIELDS} FROM category ORDER BY name ASC"
    )
    return [_row_to_category(row) for row in rows]


async def get_category_by_id(category_id: int) -> Category | None:
    """ID로 카테고리를 조회합니다."""
    row = await fetch_one(
        f"SELECT {CATEGORY_SELECT_FIELDS} FROM category WHERE id = %s",
        (category_id,),
    )
    return _row_to_category(row) if row else None


async def get_category_by_name(name: str) -> Category | None:
    """이름으로 카테고리를 조회합니다."""
    row = await fetch_one(
        f"SELECT {CATEGORY_SELECT_FIELDS} FROM category WHERE name = %s",
        (name,),
    )
    return _row_to_category(row) if row else None


async def create_category(name: str) -> Category:
    """새 카테고리를 생성합니다.

    Raises:
        pymysql.err.IntegrityError: 이름이 중복된 경우.
    """
    async with transactional() as cur:
        await cur.execute("INSERT INTO category (name) VALUES (%s)", (name,))
        category_id = cur.lastrowid

        await cur.execute(
            f"SELECT {CATEGORY_SELECT_FIELDS} FROM category WHERE id = %s",
            (category_id,),
        )
        row = await cur.fetchone()
        return _row_to_category(row)


async def count_books_in_category(category_id: int) -> int:
    """카테고리에 속한 도서 수를 반환합니다."""
    return await fetch_count(
        "SELECT COUNT(*) FROM book WHERE category_id = %s", (category_id,)
    )


async def delete_category(category_id: int) -> bool:
    """카테고리를 삭제합니다.

    Returns:
        삭제 성공 여부.
    """
    async with transactional() as cur:
        await cur.execute("DELETE FROM category WHERE id = %s", (category_id,))
        return cur.rowcount > 0
