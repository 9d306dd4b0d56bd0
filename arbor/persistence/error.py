"""Translation of database driver failures into domain errors."""

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import logfire
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from arbor.domain.error import ConflictError, InvalidArgumentError, UnavailableError

P = ParamSpec("P")
R = TypeVar("R")

# Connection refused/reset, statement and pool timeouts
UNAVAILABLE_ERRORS = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
    asyncio.TimeoutError,
    OSError,
)


def translate_store_errors(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Re-raise SQLAlchemy and driver errors as domain errors.

    Integrity violations become ``ConflictError``, values the database rejects
    (too long, out of range) become ``InvalidArgumentError`` and everything
    else the driver raises becomes ``UnavailableError``.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except IntegrityError as e:
            logfire.warn(
                "Store integrity violation", operation=func.__name__, error=str(e.orig)
            )
            raise ConflictError("Write conflicts with existing data") from e
        except DataError as e:
            logfire.warn(
                "Store rejected value", operation=func.__name__, error=str(e.orig)
            )
            raise InvalidArgumentError("Value rejected by the comment store") from e
        except UNAVAILABLE_ERRORS as e:
            logfire.error("Store unavailable", operation=func.__name__, error=str(e))
            raise UnavailableError("Comment store is unavailable") from e
        except DBAPIError as e:
            logfire.error(
                "Store failure",
                operation=func.__name__,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UnavailableError("Comment store failed") from e

    return wrapper
