from __future__ import annotations

from serrors.attrs import Attr, AttrKind, Record
from serrors.chain import contains, find, unwrap, walk
from serrors.errors import CAUSE_KEY, MESSAGE_KEY, StructuredError, new_error, wrap_error
from serrors.protocols import LogValuer, Unwrapper

__all__ = [
    "Attr",
    "AttrKind",
    "CAUSE_KEY",
    "LogValuer",
    "MESSAGE_KEY",
    "Record",
    "StructuredError",
    "Unwrapper",
    "contains",
    "find",
    "new_error",
    "unwrap",
    "walk",
    "wrap_error",
]
