"""request_context: TimingMiddleware가 기록한 요청 시각 접근 헬퍼."""

from fastapi import Request

from utils.formatters import format_datetime, utc_now


def get_request_timestamp(request: Request) -> str:
    """
    요청 타임스탬프 반환

    응답 본문과 에러 detail의 timestamp는 모두 이 값을 사용하므로
    한 요청 안에서는 항상 같은 시각이 찍힌다.
    미들웨어를 거치지 않은 요청(단위 테스트 등)은 현재 시각으로 대신한다.
    """
    request_time = getattr(request.state, "request_time", None)
    if request_time is None:
        request_time = utc_now()
    return format_datetime(request_time)
