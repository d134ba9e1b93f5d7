"""Translation of database driver failures into application errors."""

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import DBAPIError, DisconnectionError, InterfaceError, OperationalError

from gulita.core.exceptions import ServiceUnavailableError
from gulita.core.logging import get_logger

logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def is_connection_error(error: Exception) -> bool:
    """Return True if ``error`` means the database could not be reached."""
    if isinstance(error, (OperationalError, InterfaceError, DisconnectionError)):
        return True
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return True
    return isinstance(error, (ConnectionError, TimeoutError))


def translate_connection_errors(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Decorate a repository coroutine so connectivity failures surface as
    :class:`ServiceUnavailableError`. Other errors propagate unchanged.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except (DBAPIError, DisconnectionError, ConnectionError, TimeoutError) as e:
            if not is_connection_error(e):
                raise
            logger.error("Database unavailable", operation=func.__qualname__, error=str(e))
            raise ServiceUnavailableError() from e

    return wrapper
