import os

# 설정 로드 전에 테스트용 환경 변수 주입 (Rate Limiter 우회 포함)
os.environ["TESTING"] = "true"
os.environ.setdefault("SECRET_KEY", "test-secret-key-only-for-pytest-0123456789abcdef")
os.environ.setdefault("DB_HOST", "127.0.0.1")
os.environ.setdefault("DB_PORT", "3306")
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("DB_NAME", "bookshelf_test")

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock
from datetime import datetime
from httpx import AsyncClient, ASGITransport
from faker import Faker

from main import app
from models import user_models
from models.book_models import Book
from models.category_models import Category
from models.user_models import User
from utils.jwt_utils import create_access_token


@pytest_asyncio.fixture
async def client():
    """API 테스트를 위한 Async Client.

    lifespan을 실행하지 않으므로 DB 연결 없이 동작하며,
    각 테스트는 필요한 모델 함수를 AsyncMock으로 대체합니다.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fake():
    return Faker("ko_KR")


@pytest.fixture
def member():
    """일반 사용자."""
    return User(
        id=1,
        username="reader_01",
        email="reader@example.com",
        password="$2b$12$hashedpassword",
        role="user",
        created_at=datetime(2026, 1, 1, 9, 0, 0),
    )


@pytest.fixture
def other_member():
    """다른 일반 사용자."""
    return User(
        id=2,
        username="reader_02",
        email="other@example.com",
        password="$2b$12$hashedpassword",
        role="user",
    )


@pytest.fixture
def admin():
    """관리자."""
    return User(
        id=99,
        username="admin",
        email="admin@example.com",
        password="$2b$12$hashedpassword",
        role="admin",
    )


@pytest.fixture
def login_as(monkeypatch):
    """주어진 사용자로 인증된 Authorization 헤더를 반환합니다.

    토큰의 sub로 조회되는 사용자를 해당 사용자로 고정합니다.
    """

    def _login_as(user: User) -> dict:
        monkeypatch.setattr(
            user_models, "get_user_by_id", AsyncMock(return_value=user)
        )
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _login_as


@pytest.fixture
def category():
    return Category(id=3, name="과학", created_at=datetime(2026, 1, 2, 0, 0, 0))


@pytest.fixture
def book(member, category):
    """member가 등록한 도서."""
    return Book(
        id=7,
        title="코스모스",
        author="칼 세이건",
        description="우주와 인간에 대한 이야기",
        category_id=category.id,
        user_id=member.id,
        created_at=datetime(2026, 2, 1, 12, 0, 0),
        updated_at=datetime(2026, 2, 1, 12, 0, 0),
    )
