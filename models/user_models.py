"""user_models: 사용자 관련 데이터 모델 및 함수 모듈.

사용자 데이터 클래스와 MySQL 데이터베이스를 관리하는 함수들을 제공합니다.
"""

from dataclasses import dataclass
from datetime import datetime

from database.connection import fetch_all, fetch_one, transactional


ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class User:
    """사용자 데이터 클래스.

    Attributes:
        id: 사용자 고유 식별자.
        username: 사용자 이름.
        email: 이메일 주소.
        password: bcrypt 해시된 비밀번호.
        role: 권한 ("user" 또는 "admin").
        created_at: 생성 시간.
    """

    id: int
    username: str
    email: str
    password: str
    role: str = ROLE_USER
    created_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        """관리자 여부를 확인합니다."""
        return self.role == ROLE_ADMIN


# 공통으로 사용되는 SELECT 필드
USER_SELECT_FIELDS = "id, username, email, password, role, created_at"


def _row_to_user(row: tuple) -> User:
    """데이터베이스 행을 User 객체로 변환합니다.

    Args:
        row: (id, username, email, password, role, created_at)

    Returns:
        User 객체.
    """
    return User(
        id=row[0],
        username=row[1],
        email=row[2],
        password=row[3],
        role=row[4],
        created_at=row[5],
    )


async def get_all_users() -> list[User]:
    """모든 사용자를 가입 순서대로 조회합니다."""
    rows = await fetch_all(f"SELECT {USER_SELECT_FIELDS} FROM user ORDER BY id ASC")
    return [_row_to_user(row) for row in rows]


async def get_user_by_id(user_id: int) -> User | None:
    """ID로 사용자를 조회합니다.

    Args:
        user_id: 조회할 사용자의 ID.

    Returns:
        사용자 객체, 없으면 None.
    """
    row = await fetch_one(
        f"SELECT {USER_SELECT_FIELDS} FROM user WHERE id = %s", (user_id,)
    )
    return _row_to_user(row) if row else None


async def get_user_by_email(email: str) -> User | None:
    """이메일로 사용자를 조회합니다."""
    row = await fetch_one(
        f"SELECT {USER_SELECT_FIELDS} FROM user WHERE email = %s", (email,)
    )
    return _row_to_user(row) if row else None


async def get_user_by_username(username: str) -> User | None:
    row = await fetch_one(
        f"SELECT {USER_SELECT_FIELDS} FROM user WHERE username = %s", (username,)
    )
    return _row_to_user(row) if row else None


async def add_user(username: str, email: str, password: str) -> User:
    """새 사용자를 추가합니다.

    Args:
        username: 사용자 이름.
        email: 이메일 주소.
        password: 해시된 비밀번호.

    Returns:
        생성된 사용자 객체.

    Raises:
        pymysql.err.IntegrityError: 이메일 또는 사용자 이름이 중복된 경우.
    """
    async with transactional() as cur:
        await cur.execute(
            """
            INSERT INTO user (username, email, password)
            VALUES (%s, %s, %s)
            """,
            (username, email, password),
        )
        user_id = cur.lastrowid

        await cur.execute(
            f"SELECT {USER_SELECT_FIELDS} FROM user WHERE id = %s",
            (user_id,),
        )
        row = await cur.fetchone()
        return _row_to_user(row)
