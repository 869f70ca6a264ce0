"""api_routes: /api/v1 라우트 선언 모듈.

각 라우트를 (메서드, 경로 템플릿, 핸들러 식별자)로 명시적으로 나열합니다.
books는 리소스 전체 액션(index, create, show, update, destroy)을 노출하며,
화면 전용 액션(new, edit)은 API 서버에서 제외합니다.
"""

from core.routing import Route, RouteTable

API_PREFIX = "/api/v1"


def _api(method: str, path: str, handler_id: str) -> Route:
    return Route(method, f"{API_PREFIX}{path}", handler_id)


route_table = RouteTable(
    [
        # users: index만 노출 (회원가입은 /register)
        _api("GET", "/users", "users#index"),
        # categories
        _api("GET", "/categories", "categories#index"),
        _api("POST", "/categories", "categories#create"),
        _api("DELETE", "/categories/:id", "categories#destroy"),
        # books
        _api("GET", "/books", "books#index"),
        _api("POST", "/books", "books#create"),
        _api("GET", "/books/:id", "books#show"),
        _api("PUT", "/books/:id", "books#update"),
        _api("PATCH", "/books/:id", "books#update"),
        _api("DELETE", "/books/:id", "books#destroy"),
        # 인증
        _api("POST", "/login", "authentication#create"),
        _api("POST", "/register", "users#create"),
    ]
)
