"""서비스 레이어.

레포지터리 에러를 API 에러로 변환하고 DTO 와 엔티티 사이의 변환을 담당합니다.
"""
from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, TypeVar, cast

from sqlalchemy.exc import DBAPIError

from sneakercollection.core import ApiError, CommonError
from sneakercollection.logging import get_logger

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger("sneakercollection.services")


def error_message(e: BaseException) -> str:
    """응답에 담을 예외 메세지.

    SqlAlchemy 에러는 SQL 문장과 파라미터가 붙지 않은 드라이버 메세지만 사용합니다.
    """
    if isinstance(e, DBAPIError) and e.orig is not None:
        return str(e.orig)
    return str(e)


def translate_errors(fallback: str) -> Callable[[F], F]:
    """서비스 메소드에서 발생한 예외를 API 에러로 변환합니다.

    :class:`ApiError` (``NotFoundError`` 등)는 그대로 전달하고, 그 외의 예외는
    원래 메세지를 담은 :class:`CommonError` 로 바꿉니다. 원래 예외에 메세지가
    없으면 ``fallback`` 의 ``{인자이름}`` 을 메소드 인자로 채워서 사용합니다.
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except ApiError:
                raise
            except Exception as e:
                logger.exception("%s failed", func.__qualname__)
                arguments = signature.bind(*args, **kwargs).arguments
                message = error_message(e) or fallback.format(**arguments)
                raise CommonError(message) from e

        return cast(F, wrapper)

    return decorator


from .auth import AuthenticationService  # noqa
from .sneaker import SneakerService  # noqa
from .user import UserService  # noqa
