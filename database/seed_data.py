"""seed_data.py: 개발용 더미 데이터 생성 스크립트.

사용법:
    source .venv/bin/activate
    python database/seed_data.py

생성되는 데이터:
    - 관리자 1명 (admin@example.com / Admin1234!)
    - 일반 사용자 50명 (user{n}@example.com / Test1234!)
    - 카테고리 8개
    - 도서 500권
"""

import asyncio
import random

from faker import Faker

# 프로젝트 루트를 PYTHONPATH에 추가
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from database.connection import init_db, close_db, transactional
from utils.password import hash_password

fake = Faker("ko_KR")
Faker.seed(42)  # 재현 가능한 데이터
random.seed(42)

NUM_USERS = 50
NUM_BOOKS = 500
CATEGORIES = ["소설", "시/에세이", "인문", "역사", "과학", "컴퓨터/IT", "경제/경영", "만화"]


async def clear_existing_data():
    """기존 데이터 삭제 (개발 환경 전용)."""
    print("Clearing existing data...")
    async with transactional() as cur:
        await cur.execute("SET FOREIGN_KEY_CHECKS = 0")
        await cur.execute("TRUNCATE TABLE book")
        await cur.execute("TRUNCATE TABLE category")
        await cur.execute("TRUNCATE TABLE user")
        await cur.execute("SET FOREIGN_KEY_CHECKS = 1")


async def seed_users() -> list[int]:
    """관리자와 일반 사용자 생성."""
    admin_password = hash_password("Admin1234!")
    user_password = hash_password("Test1234!")

    rows = [("admin", "admin@example.com", admin_password, "admin")]
    rows += [
        (f"user_{i:03d}", f"user{i}@example.com", user_password, "user")
        for i in range(1, NUM_USERS + 1)
    ]

    async with transactional() as cur:
        await cur.executemany(
            "INSERT INTO user (username, email, password, role) VALUES (%s, %s, %s, %s)",
            rows,
        )
        await cur.execute("SELECT id FROM user")
        user_ids = [row[0] for row in await cur.fetchall()]

    print(f"✓ {len(user_ids)} users created")
    return user_ids


async def seed_categories() -> list[int]:
    """카테고리 생성."""
    async with transactional() as cur:
        await cur.executemany(
            "INSERT INTO category (name) VALUES (%s)", [(name,) for name in CATEGORIES]
        )
        await cur.execute("SELECT id FROM category")
        category_ids = [row[0] for row in await cur.fetchall()]

    print(f"✓ {len(category_ids)} categories created")
    return category_ids


async def seed_books(user_ids: list[int], category_ids: list[int]) -> None:
    """도서 생성."""
    rows = [
        (
            fake.catch_phrase(),
            fake.name(),
            fake.paragraph(nb_sentences=3),
            random.choice(category_ids),
            random.choice(user_ids),
        )
        for _ in range(NUM_BOOKS)
    ]

    async with transactional() as cur:
        await cur.executemany(
            """
            INSERT INTO book (title, author, description, category_id, user_id)
            VALUES (%s, %s, %s, %s, %s)
            """,
            rows,
        )

    print(f"✓ {NUM_BOOKS} books created")


async def main():
    await init_db()
    try:
        await clear_existing_data()
        user_ids = await seed_users()
        category_ids = await seed_categories()
        await seed_books(user_ids, category_ids)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
