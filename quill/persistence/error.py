"""Translation of driver failures into domain store errors."""

import functools
from typing import Awaitable, Callable, ParamSpec, TypeVar

import logfire
from sqlalchemy.exc import SQLAlchemyError

from quill.domain.error import StoreError

P = ParamSpec("P")
R = TypeVar("R")


def store_operation(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Wrap a repository coroutine so SQLAlchemy failures raise StoreError.

    Args:
        operation: Name reported in the error, e.g. ``"comment.delete"``
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logfire.error("Store operation failed", operation=operation, error=str(e))
                raise StoreError(operation, type(e).__name__) from e

        return wrapper

    return decorator
