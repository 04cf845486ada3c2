"""Loguru integration for structured errors.

Bind an error into ``extra`` to get its nested record out of serializing
sinks, or format it into the message to get the flat form::

    log = bind_errors()
    log.bind(error=err).error("request failed")  # extra.error is a dict
    log.error("request failed: {}", err)  # flat text
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

from serrors.attrs import Record
from serrors.config import Settings
from serrors.protocols import LogValuer

if TYPE_CHECKING:
    from loguru import Logger
    from loguru import Record as LogRecord


def log_value(value: Any) -> Any:
    """Resolve *value* into something a JSON sink can serialize."""
    if isinstance(value, LogValuer):
        value = value.log_value()
    if isinstance(value, Record):
        return value.as_dict()
    return value


def structured_patcher(record: LogRecord) -> None:
    """Replace structured values bound in ``extra`` by their nested dicts."""
    extra = record["extra"]
    for key, value in list(extra.items()):
        if isinstance(value, (LogValuer, Record)):
            extra[key] = log_value(value)


def bind_errors(log: Logger = logger) -> Logger:
    return log.patch(structured_patcher)


def setup_logging(settings: Settings | None = None, sink: Any = None) -> int:
    """Install the patcher globally and add a single sink.

    Returns the loguru handler id of the added sink.
    """
    settings = settings or Settings()
    logger.remove()
    logger.configure(patcher=structured_patcher)
    return logger.add(
        sys.stderr if sink is None else sink,
        level=settings.log_level,
        serialize=settings.log_json,
    )
