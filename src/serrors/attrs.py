from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum
from typing import Any

from serrors.protocols import LogValuer

CYCLE = "<cycle>"
NIL = "<nil>"

# ids of values being rendered further up the stack; only re-entry through
# foreign causes or attribute values reaches this guard
_active: ContextVar[frozenset[int]] = ContextVar("serrors_active", default=frozenset())


@contextmanager
def rendering(obj: object, *more: object) -> Iterator[bool]:
    """Mark *obj* and *more* as being rendered.

    Yields ``False`` without marking anything if *obj* already is.
    """
    active = _active.get()
    if id(obj) in active:
        yield False
        return
    token = _active.set(active | {id(obj)} | {id(o) for o in more})
    try:
        yield True
    finally:
        _active.reset(token)


def resolve(value: Any) -> Any:
    """Return the structured form of *value*, keeping native types as is."""
    if isinstance(value, LogValuer):
        with rendering(value) as fresh:
            if not fresh:
                return CYCLE
            return value.log_value()
    return value


class AttrKind(str, Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    ANY = "any"


@dataclass(frozen=True, slots=True)
class Attr:
    """Key/value diagnostic pair attached to an error."""

    key: str
    value: Any

    @property
    def kind(self) -> AttrKind:
        # bool is a subclass of int
        if isinstance(self.value, bool):
            return AttrKind.BOOL
        if isinstance(self.value, int):
            return AttrKind.INT
        if isinstance(self.value, float):
            return AttrKind.FLOAT
        if isinstance(self.value, str):
            return AttrKind.STRING
        return AttrKind.ANY

    def text(self) -> str:
        """Flat textual form of the value.

        Floats use ``repr``, so ``1.0`` renders as ``1.0`` rather than ``1``.
        ``None`` renders as ``<nil>`` and booleans as ``true``/``false``.
        """
        match self.kind:
            case AttrKind.STRING:
                return self.value
            case AttrKind.BOOL:
                return "true" if self.value else "false"
            case AttrKind.INT:
                return str(self.value)
            case AttrKind.FLOAT:
                return repr(self.value)
        if self.value is None:
            return NIL
        if isinstance(self.value, Record):
            return f"[{self.value}]"
        return str(self.value)

    def resolved(self) -> Any:
        return resolve(self.value)

    def __str__(self) -> str:
        return f"{self.key}={self.text()}"


def string(key: str, value: Any) -> Attr:
    return Attr(key, str(value))


def integer(key: str, value: Any) -> Attr:
    return Attr(key, int(value))


def floating(key: str, value: Any) -> Attr:
    return Attr(key, float(value))


def boolean(key: str, value: Any) -> Attr:
    return Attr(key, bool(value))


def any_(key: str, value: Any) -> Attr:
    return Attr(key, value)


def as_attrs(*pairs: Attr | tuple[str, Any], **kwargs: Any) -> tuple[Attr, ...]:
    """Normalize positional pairs followed by keyword pairs into attributes."""
    out: list[Attr] = []
    for pair in pairs:
        if isinstance(pair, Attr):
            out.append(pair)
        elif isinstance(pair, tuple) and len(pair) == 2 and isinstance(pair[0], str):
            out.append(Attr(pair[0], pair[1]))
        else:
            raise TypeError(f"expected Attr or (key, value) pair, got {pair!r}")
    out.extend(Attr(key, value) for key, value in kwargs.items())
    return tuple(out)


@dataclass(frozen=True, slots=True)
class Record:
    """Ordered group of attributes produced by structured rendering.

    Keys may repeat; every occurrence is kept. Converting to a ``dict``
    keeps the last one, which is what JSON transports do as well.
    """

    attrs: tuple[Attr, ...] = ()

    def __iter__(self) -> Iterator[Attr]:
        return iter(self.attrs)

    def __len__(self) -> int:
        return len(self.attrs)

    def keys(self) -> list[str]:
        return [attr.key for attr in self.attrs]

    def get(self, key: str, default: Any = None) -> Any:
        for attr in reversed(self.attrs):
            if attr.key == key:
                return attr.value
        return default

    def as_dict(self) -> dict[str, Any]:
        root: dict[str, Any] = {}
        pending: list[tuple[Record, dict[str, Any]]] = [(self, root)]
        while pending:
            record, out = pending.pop()
            for attr in record.attrs:
                if isinstance(attr.value, Record):
                    child: dict[str, Any] = {}
                    out[attr.key] = child
                    pending.append((attr.value, child))
                else:
                    out[attr.key] = attr.value
        return root

    def __str__(self) -> str:
        return " ".join(str(attr) for attr in self.attrs)
