"""routers: 라우트 선언 및 디스패처 패키지.

/api/v1 라우트 테이블과 이를 FastAPI에 연결하는 디스패처를 제공합니다.
"""

from .api_routes import API_PREFIX, route_table
from .dispatcher import ACTIONS, api_router

__all__ = [
    "API_PREFIX",
    "route_table",
    "ACTIONS",
    "api_router",
]
