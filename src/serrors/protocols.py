"""Structural capabilities recognised by the chain walker and log helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from serrors.attrs import Record


@runtime_checkable
class Unwrapper(Protocol):
    """An error that exposes the error it wraps."""

    def unwrap(self) -> BaseException | None:  # pragma: no cover - protocol definition
        """Return the wrapped error or ``None``."""


@runtime_checkable
class LogValuer(Protocol):
    """A value that knows how to render itself as a structured record."""

    def log_value(self) -> Record:  # pragma: no cover - protocol definition
        """Return the structured representation of the value."""
