from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Callable
from typing import Any, NoReturn, ParamSpec, TypeVar

from loguru import logger

from serrors.errors import wrap_error

P = ParamSpec("P")
R = TypeVar("R")


def log_and_wrap(
    exc: BaseException,
    message: str,
    log=logger,  # loguru logger-like
    /,
    **attrs: Any,
) -> NoReturn:
    """Log *exc* and raise it wrapped into a structured error."""
    wrapped = wrap_error(message, exc, **attrs)
    log.bind(error=wrapped).opt(exception=exc).error("{}", message)
    raise wrapped from exc


def wrap_exceptions(message: str, /, **attrs: Any) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator wrapping errors escaping the call into a structured error.

    The wrapped error carries *message* and *attrs*, keeps the original
    exception as its cause and is logged before being raised.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
                try:
                    return await func(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    log_and_wrap(exc, message, **attrs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                log_and_wrap(exc, message, **attrs)

        return sync_wrapper  # type: ignore[return-value]

    return decorator
