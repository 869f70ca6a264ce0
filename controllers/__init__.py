"""controllers: 비즈니스 로직 및 요청 핸들러 패키지.

인증, 사용자, 카테고리, 도서 관련 컨트롤러 모듈을 제공합니다.
"""

from . import auth_controller
from . import user_controller
from . import category_controller
from . import book_controller

__all__ = [
    "auth_controller",
    "user_controller",
    "category_controller",
    "book_controller",
]
