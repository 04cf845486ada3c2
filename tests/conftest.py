import json
import sys
from collections.abc import Iterator
from typing import Any

import pytest
from loguru import logger


@pytest.fixture
def json_sink() -> Iterator[list[dict[str, Any]]]:
    """Collect serialized loguru records as parsed dicts."""
    records: list[dict[str, Any]] = []

    def sink(message: str) -> None:
        records.append(json.loads(message)["record"])

    sink_id = logger.add(sink, level="DEBUG", serialize=True)
    yield records
    logger.remove(sink_id)


@pytest.fixture
def text_sink() -> Iterator[list[str]]:
    """Collect formatted loguru messages."""
    lines: list[str] = []
    sink_id = logger.add(lambda m: lines.append(str(m).rstrip("\n")), level="DEBUG", format="{message}")
    yield lines
    logger.remove(sink_id)


@pytest.fixture
def reset_logger() -> Iterator[None]:
    """Restore loguru global state changed by setup_logging."""
    yield
    logger.remove()
    logger.configure(patcher=lambda record: None)
    logger.add(sys.stderr)
