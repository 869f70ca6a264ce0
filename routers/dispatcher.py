"""dispatcher: 라우트 테이블 기반 요청 디스패처 모듈.

/api/v1 이하의 모든 요청을 하나의 엔드포인트로 받아 route_table에서 핸들러
식별자를 찾고, 식별자에 등록된 컨트롤러 액션을 호출합니다.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from controllers import (
    auth_controller,
    book_controller,
    category_controller,
    user_controller,
)
from core.routing import RouteTable
from routers.api_routes import API_PREFIX, route_table

logger = logging.getLogger("api")

DISPATCH_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@dataclass(frozen=True)
class Action:
    """핸들러 식별자에 연결된 컨트롤러 액션.

    Attributes:
        endpoint: (request, **path_params)를 받는 컨트롤러 코루틴.
        status_code: 성공 시 응답 상태 코드.
    """

    endpoint: Callable[..., Awaitable[Any]]
    status_code: int = status.HTTP_200_OK


ACTIONS: dict[str, Action] = {
    "users#index": Action(user_controller.get_users),
    "users#create": Action(user_controller.create_user, status.HTTP_201_CREATED),
    "authentication#create": Action(auth_controller.login),
    "categories#index": Action(category_controller.get_categories),
    "categories#create": Action(
        category_controller.create_category, status.HTTP_201_CREATED
    ),
    "categories#destroy": Action(category_controller.delete_category),
    "books#index": Action(book_controller.get_books),
    "books#create": Action(book_controller.create_book, status.HTTP_201_CREATED),
    "books#show": Action(book_controller.get_book),
    "books#update": Action(book_controller.update_book),
    "books#destroy": Action(book_controller.delete_book),
}


def verify_actions(table: RouteTable, actions: dict[str, Action]) -> None:
    """테이블에 선언된 모든 핸들러 식별자에 액션이 등록되어 있는지 확인합니다.

    Raises:
        RuntimeError: 액션이 없는 핸들러 식별자가 있는 경우.
    """
    missing = table.handler_ids() - actions.keys()
    if missing:
        raise RuntimeError(f"핸들러 액션이 등록되지 않았습니다: {sorted(missing)}")


# 애플리케이션 시작 시점에 선언과 등록 불일치를 감지
verify_actions(route_table, ACTIONS)


def normalize_path(path: str) -> str:
    """끝의 슬래시 하나를 제거합니다 ("/"는 그대로 유지)."""
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


async def dispatch(request: Request) -> Response:
    """요청을 라우트 테이블로 해석하여 컨트롤러 액션을 호출합니다.

    Raises:
        RouteNotFound: 일치하는 라우트가 없는 경우 (404로 변환됨).
    """
    path = normalize_path(request.url.path)
    result = route_table.resolve(request.method, path)
    logger.debug(
        "%s %s -> %s %s",
        request.method,
        path,
        result.handler_id,
        result.path_params,
    )

    action = ACTIONS[result.handler_id]
    outcome = await action.endpoint(request, **result.path_params)

    if isinstance(outcome, Response):
        return outcome
    return JSONResponse(status_code=action.status_code, content=outcome)


api_router = APIRouter(tags=["api"])
api_router.add_api_route(
    API_PREFIX, dispatch, methods=DISPATCH_METHODS, include_in_schema=False
)
api_router.add_api_route(
    API_PREFIX + "/{path:path}",
    dispatch,
    methods=DISPATCH_METHODS,
    include_in_schema=False,
)
