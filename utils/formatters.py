"""formatters: 응답에 쓰이는 날짜/시간 포맷 유틸리티."""

from datetime import datetime, timezone

# 응답 전체에서 공통으로 쓰는 UTC ISO 8601 형식
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_datetime(dt: datetime | str | None) -> str | None:
    """datetime을 TIMESTAMP_FORMAT 문자열로 변환합니다.

    timezone 정보가 있으면 UTC로 변환하고, 없으면 이미 UTC인 값(MySQL DATETIME)으로
    간주합니다. None은 None, 문자열은 그대로 반환합니다.
    """
    if dt is None or isinstance(dt, str):
        return dt
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(TIMESTAMP_FORMAT)
