from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from serrors.attrs import CYCLE, Attr, Record, as_attrs, rendering, resolve

MESSAGE_KEY = "msg"
CAUSE_KEY = "cause"

_FIELDS = frozenset({"message", "cause", "attrs"})
_NO_CAUSE = object()


@dataclass(slots=True, eq=False)
class StructuredError(Exception):
    """Error carrying a message, an optional cause and diagnostic attributes.

    Attributes:
        message: Human-readable message, rendered verbatim.
        cause: Wrapped lower-level error, if any.
        attrs: Ordered key/value pairs; duplicated keys are kept.

    ``str(err)`` gives the flat form
    ``message cause=[<cause>] key=value ...`` and :meth:`log_value` the
    nested record consumed by structured log sinks.

    The three fields are read-only once set. Everything else Python writes
    on exceptions (``__traceback__``, ``__notes__``, ...) stays writable.
    """

    message: str
    cause: BaseException | None = None
    attrs: tuple[Attr, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", as_attrs(*self.attrs))
        if self.cause is not None:
            self.__cause__ = self.cause

    def __setattr__(self, name: str, value: Any) -> None:
        # slots are unset until __init__ assigns them
        if name in _FIELDS and hasattr(self, name):
            raise AttributeError(f"cannot assign to field {name!r}")
        Exception.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        if name in _FIELDS:
            raise AttributeError(f"cannot delete field {name!r}")
        Exception.__delattr__(self, name)

    def _chain(self) -> tuple[list[StructuredError], Any]:
        """Split the cause chain into its structured layers and what ends it.

        The tail is ``_NO_CAUSE``, :data:`CYCLE` when the chain loops back on
        one of its layers, or the first cause that is not a StructuredError.
        """
        layers: list[StructuredError] = []
        seen: set[int] = set()
        current: Any = self
        while isinstance(current, StructuredError):
            if id(current) in seen:
                return layers, CYCLE
            seen.add(id(current))
            layers.append(current)
            current = current.cause
        return layers, _NO_CAUSE if current is None else current

    def _flat(self, cause: str | None) -> str:
        parts = [self.message]
        if cause is not None:
            parts.append(f"{CAUSE_KEY}=[{cause}]")
        parts.extend(str(attr) for attr in self.attrs)
        return " ".join(parts)

    def _record(self, cause: Any) -> Record:
        attrs = [Attr(MESSAGE_KEY, self.message)]
        if cause is not _NO_CAUSE:
            attrs.append(Attr(CAUSE_KEY, cause))
        attrs.extend(Attr(attr.key, attr.resolved()) for attr in self.attrs)
        return Record(tuple(attrs))

    def __str__(self) -> str:
        layers, tail = self._chain()
        with rendering(self, *layers) as fresh:
            if not fresh:
                return CYCLE
            text = None if tail is _NO_CAUSE else str(tail)
            for layer in reversed(layers):
                text = layer._flat(text)
            return text

    def log_value(self) -> Record:
        layers, tail = self._chain()
        with rendering(self, *layers):
            value = tail
            if tail is not _NO_CAUSE and tail is not CYCLE:
                value = resolve(tail)
                if isinstance(value, BaseException):
                    value = str(value)
            for layer in reversed(layers):
                value = layer._record(value)
            return value

    def as_dict(self) -> dict[str, Any]:
        return self.log_value().as_dict()

    def unwrap(self) -> BaseException | None:
        return self.cause


def new_error(message: str, /, *attrs: Attr | tuple[str, Any], **kwattrs: Any) -> StructuredError:
    """Create an error without a cause."""
    return StructuredError(message, None, as_attrs(*attrs, **kwattrs))


def wrap_error(
    message: str,
    cause: BaseException | None,
    /,
    *attrs: Attr | tuple[str, Any],
    **kwattrs: Any,
) -> StructuredError:
    """Create an error wrapping *cause*; a ``None`` cause acts like :func:`new_error`."""
    return StructuredError(message, cause, as_attrs(*attrs, **kwattrs))
