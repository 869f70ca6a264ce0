"""routing: 정적 라우트 테이블과 경로 매칭 모듈.

(HTTP 메서드, 경로) 쌍을 핸들러 식별자(예: "books#show")로 변환합니다.
라우트 테이블은 프로세스 시작 시 한 번 생성되며 이후 변경되지 않으므로
resolve()는 동기화 없이 동시에 호출해도 안전합니다.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

PARAM_PREFIX = ":"


class RouteNotFound(Exception):
    """일치하는 라우트가 없을 때 발생하는 예외.

    Attributes:
        method: 요청 HTTP 메서드.
        path: 요청 경로.
    """

    def __init__(self, method: str, path: str):
        self.method = method
        self.path = path
        super().__init__(f"No route matches {method} {path!r}")


@dataclass(frozen=True)
class PathSegment:
    """라우트 경로 템플릿의 한 세그먼트.

    리터럴:  ``books``  (is_param=False)
    파라미터: ``:id``   (is_param=True, value="id")
    """

    value: str
    is_param: bool = False


def parse_pattern(path_pattern: str) -> tuple[PathSegment, ...]:
    """경로 템플릿을 세그먼트 튜플로 분해합니다.

    Args:
        path_pattern: "/"로 시작하는 경로 템플릿 (예: "/api/v1/books/:id").

    Returns:
        세그먼트 튜플.

    Raises:
        ValueError: 템플릿이 "/"로 시작하지 않거나 이름 없는 파라미터가 있는 경우.
    """
    if not path_pattern.startswith("/"):
        raise ValueError(f"path pattern must start with '/': {path_pattern!r}")

    segments = []
    for part in path_pattern.split("/")[1:]:
        if part.startswith(PARAM_PREFIX):
            name = part[len(PARAM_PREFIX):]
            if not name:
                raise ValueError(f"unnamed path parameter in {path_pattern!r}")
            segments.append(PathSegment(name, is_param=True))
        else:
            segments.append(PathSegment(part))
    return tuple(segments)


@dataclass(frozen=True)
class Route:
    """불변 라우트 정의.

    Attributes:
        method: HTTP 메서드 (예: "GET").
        path_pattern: 경로 템플릿 (예: "/api/v1/books/:id").
        handler_id: 호출할 핸들러 식별자 (예: "books#show").
    """

    method: str
    path_pattern: str
    handler_id: str
    segments: tuple[PathSegment, ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.method:
            raise ValueError("route method must not be empty")
        if not self.handler_id:
            raise ValueError("route handler_id must not be empty")
        object.__setattr__(self, "segments", parse_pattern(self.path_pattern))

    def match(self, method: str, parts: list[str]) -> dict[str, str] | None:
        """분해된 요청 경로와 비교하여 파라미터를 추출합니다.

        Returns:
            일치하면 파라미터 이름 -> 캡처 문자열 딕셔너리, 아니면 None.
        """
        if method != self.method or len(parts) != len(self.segments):
            return None

        params: dict[str, str] = {}
        for segment, part in zip(self.segments, parts):
            if segment.is_param:
                # 파라미터는 비어있지 않은 단일 세그먼트만 매칭
                if not part:
                    return None
                params[segment.value] = part
            elif segment.value != part:
                return None
        return params


@dataclass(frozen=True)
class DispatchResult:
    """라우트 매칭 성공 결과."""

    handler_id: str
    path_params: dict[str, str]


class RouteTable:
    """순서가 있는 불변 라우트 테이블.

    테이블 순서대로 비교하여 처음 일치하는 라우트를 사용합니다.
    (method, path_pattern) 쌍은 테이블 내에서 유일해야 합니다.

    사용 예시:
        table = RouteTable([Route("GET", "/api/v1/books/:id", "books#show")])
        result = table.resolve("GET", "/api/v1/books/7")
        # DispatchResult(handler_id="books#show", path_params={"id": "7"})
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: Iterable[Route]):
        routes = tuple(routes)
        seen: set[tuple[str, str]] = set()
        for route in routes:
            key = (route.method, route.path_pattern)
            if key in seen:
                raise ValueError(
                    f"duplicate route: {route.method} {route.path_pattern}"
                )
            seen.add(key)
        self._routes = routes

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def handler_ids(self) -> set[str]:
        """테이블에 선언된 모든 핸들러 식별자를 반환합니다."""
        return {route.handler_id for route in self._routes}

    def resolve(self, method: str, path: str) -> DispatchResult:
        """요청 메서드와 경로에 해당하는 핸들러를 찾습니다.

        Args:
            method: HTTP 메서드 (대소문자 구분).
            path: "/"로 시작하는 정규화된 요청 경로.

        Returns:
            핸들러 식별자와 경로 파라미터를 담은 DispatchResult.

        Raises:
            RouteNotFound: 일치하는 라우트가 없는 경우.
        """
        if not path.startswith("/"):
            raise RouteNotFound(method, path)

        parts = path.split("/")[1:]
        for route in self._routes:
            params = route.match(method, parts)
            if params is not None:
                return DispatchResult(route.handler_id, params)

        raise RouteNotFound(method, path)
