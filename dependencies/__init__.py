"""dependencies: 요청 처리 공통 의존성 패키지.

인증, 요청 컨텍스트, 요청 데이터 파싱 관련 함수를 제공합니다.
"""

from .auth import get_current_user, require_admin
from .request_context import get_request_timestamp
from .request_data import parse_json_body, parse_path_id, parse_query_int

__all__ = [
    "get_current_user",
    "require_admin",
    "get_request_timestamp",
    "parse_json_body",
    "parse_path_id",
    "parse_query_int",
]
