"""password: bcrypt 기반 비밀번호 해싱 모듈.

bcrypt는 CPU를 오래 점유하므로 async 코드에서는 asyncio.to_thread로 호출합니다.
"""

import bcrypt

BCRYPT_ROUNDS = 12

# bcrypt는 입력의 앞 72바이트만 사용함
_BCRYPT_MAX_BYTES = 72


def _to_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시 문자열로 변환합니다."""
    hashed = bcrypt.hashpw(_to_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호가 저장된 해시와 일치하는지 확인합니다.

    저장된 값이 bcrypt 해시 형식이 아니면 False를 반환합니다.
    """
    try:
        return bcrypt.checkpw(_to_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False
