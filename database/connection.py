"""database.connection: MySQL 연결 풀과 쿼리 헬퍼 모듈.

aiomysql 연결 풀을 애플리케이션 생명주기에 맞춰 생성/종료하고,
모델 함수에서 사용하는 단건/다건 조회 헬퍼와 트랜잭션 컨텍스트를 제공합니다.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Sequence

import aiomysql

from core.config import settings

logger = logging.getLogger("api")

_pool: aiomysql.Pool | None = None


async def init_db() -> None:
    """연결 풀을 생성합니다. lifespan 시작 시 호출됩니다."""
    global _pool
    try:
        _pool = await aiomysql.create_pool(
            host=settings.DB_HOST,
            port=settings.DB_PORT,
            user=settings.DB_USER,
            password=settings.DB_PASSWORD,
            db=settings.DB_NAME,
            charset="utf8mb4",
            autocommit=True,
            minsize=settings.DB_POOL_MIN_SIZE,
            maxsize=settings.DB_POOL_MAX_SIZE,
            connect_timeout=settings.DB_CONNECT_TIMEOUT,
        )
    except Exception:
        logger.exception(
            "MySQL 연결 풀 생성 실패: %s:%s/%s",
            settings.DB_HOST,
            settings.DB_PORT,
            settings.DB_NAME,
        )
        raise

    logger.info(
        "MySQL 연결 풀 생성: %s:%s/%s (max=%d)",
        settings.DB_HOST,
        settings.DB_PORT,
        settings.DB_NAME,
        settings.DB_POOL_MAX_SIZE,
    )


async def close_db() -> None:
    """연결 풀을 닫습니다. 풀이 없으면 아무 것도 하지 않습니다."""
    global _pool
    if _pool is None:
        return
    _pool.close()
    await _pool.wait_closed()
    _pool = None
    logger.info("MySQL 연결 풀 종료")


def get_pool() -> aiomysql.Pool:
    """
    현재 연결 풀 반환

    Raises:
        RuntimeError: init_db() 이전에 호출된 경우.
    """
    if _pool is None:
        raise RuntimeError("데이터베이스 연결 풀이 초기화되지 않았습니다.")
    return _pool


@asynccontextmanager
async def get_connection() -> AsyncGenerator[aiomysql.Connection, None]:
    """풀에서 연결을 빌려 autocommit 상태로 제공합니다."""
    async with get_pool().acquire() as conn:
        yield conn


@asynccontextmanager
async def transactional() -> AsyncGenerator[aiomysql.Cursor, None]:
    """트랜잭션 범위의 커서를 제공합니다.

    블록이 정상 종료되면 커밋하고, 예외가 발생하면 롤백 후 다시 던집니다.

        async with transactional() as cur:
            await cur.execute("INSERT INTO book ...", params)
            book_id = cur.lastrowid
    """
    async with get_pool().acquire() as conn:
        await conn.begin()
        try:
            async with conn.cursor() as cur:
                yield cur
        except Exception:
            await conn.rollback()
            raise
        await conn.commit()


async def fetch_one(query: str, params: Sequence[Any] = ()) -> tuple | None:
    """단건 조회. 결과가 없으면 None."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(query, params)
            return await cur.fetchone()


async def fetch_all(query: str, params: Sequence[Any] = ()) -> list[tuple]:
    """다건 조회."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(query, params)
            return list(await cur.fetchall())


async def fetch_count(query: str, params: Sequence[Any] = ()) -> int:
    """COUNT(*) 쿼리의 결과를 정수로 반환합니다."""
    row = await fetch_one(query, params)
    return row[0] if row else 0


async def test_connection() -> bool:
    """헬스 체크용 연결 확인. 실패 시 예외를 기록하고 False 반환."""
    try:
        await fetch_one("SELECT 1")
    except Exception:
        logger.exception("데이터베이스 연결 확인 실패")
        return False
    return True
