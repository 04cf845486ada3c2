"""Walking wrapped-error chains.

Errors exposing ``unwrap()`` (see :class:`serrors.protocols.Unwrapper`) are
followed through that method; any other exception is followed through its
explicit ``__cause__``. Exception groups contribute their members.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

from serrors.protocols import Unwrapper

E = TypeVar("E", bound=BaseException)


def unwrap(err: BaseException) -> BaseException | None:
    """Return the error directly wrapped by *err*, or ``None``."""
    if isinstance(err, Unwrapper):
        return err.unwrap()
    return err.__cause__


def walk(err: BaseException | None) -> Iterator[BaseException]:
    """Yield *err* and every error reachable from it, nearest first.

    Each error is yielded once, so a chain that loops back on itself ends.
    """
    seen: set[int] = set()
    stack: list[BaseException | None] = [err]
    while stack:
        current = stack.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        children: list[BaseException | None] = []
        if isinstance(current, BaseExceptionGroup):
            children.extend(current.exceptions)
        children.append(unwrap(current))
        stack.extend(reversed(children))


def contains(err: BaseException | None, target: BaseException) -> bool:
    """Tell whether *target* itself is *err* or is wrapped somewhere inside it."""
    return any(current is target for current in walk(err))


def find(err: BaseException | None, kind: type[E]) -> E | None:
    """Return the first error in the chain that is an instance of *kind*."""
    for current in walk(err):
        if isinstance(current, kind):
            return current
    return None
