"""Structured logging configuration for tolerance-kit test runs."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Attributes passed through ``extra=`` that are copied into the JSON payload.
EXTRA_FIELDS: tuple[str, ...] = ("seed", "task", "runs", "elapsed_ns")


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True, default=str)


def resolve_level(level: str | int) -> int:
    """Map a level name or number to its numeric logging level."""
    if isinstance(level, int):
        return level
    normalized = level.strip().upper()
    resolved = logging.getLevelName(normalized)
    if isinstance(resolved, int):
        return resolved
    msg = f"Unsupported log level: {level}"
    raise ValueError(msg)


def configure_logging(
    *,
    log_level: str | int = "INFO",
    log_file: str | Path | None = None,
    console: bool = True,
    logger_name: str | None = None,
) -> logging.Logger:
    """Configure a logger (the root logger by default) with JSON console/file handlers."""

    logger = logging.getLogger(logger_name)
    logger.setLevel(resolve_level(log_level))
    logger.handlers.clear()

    formatter = JsonFormatter()

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# Test result levels sit next to the standard levels without replacing their names.
TEST_FAILURE = logging.ERROR + 5
TEST_WARNING = logging.WARNING + 5
TEST_INFO = logging.INFO - 5
TEST_DEBUG = logging.DEBUG - 5

for _level, _name in (
    (TEST_FAILURE, "TEST_FAILURE"),
    (TEST_WARNING, "TEST_WARNING"),
    (TEST_INFO, "TEST_INFO"),
    (TEST_DEBUG, "TEST_DEBUG"),
):
    logging.addLevelName(_level, _name)

RESULTS_LOGGER = "tolerance_kit.results"


class _LazyMessage:
    """Defer building a message until a handler renders the record."""

    __slots__ = ("_supplier", "_text")

    def __init__(self, supplier: Callable[[], Any]) -> None:
        self._supplier: Callable[[], Any] | None = supplier
        self._text = ""

    def __str__(self) -> str:
        if self._supplier is not None:
            self._text = str(self._supplier())
            self._supplier = None
        return self._text


def make_record(
    level: str | int,
    msg: Any,
    *args: Any,
    name: str = RESULTS_LOGGER,
    exc_info: Any = None,
) -> logging.LogRecord:
    """Build a record for ``logger.handle``.

    ``msg`` is a ``%``-style format string for ``args``, any object rendered with
    ``str``, or a zero-argument callable evaluated when the message is first
    rendered.
    """
    if callable(msg) and not args:
        msg = _LazyMessage(msg)
    factory = logging.getLogRecordFactory()
    return factory(name, resolve_level(level), "(unknown file)", 0, msg, args or None, exc_info)


def fail_record(msg: Any, *args: Any, name: str = RESULTS_LOGGER) -> logging.LogRecord:
    """Record a test failure; an exception supplies both message and traceback."""
    if isinstance(msg, BaseException):
        return make_record(
            TEST_FAILURE, str(msg), name=name, exc_info=(type(msg), msg, msg.__traceback__)
        )
    return make_record(TEST_FAILURE, msg, *args, name=name)


def result_record(
    result: bool, msg: Any, *args: Any, name: str = RESULTS_LOGGER
) -> logging.LogRecord:
    level = TEST_INFO if result else TEST_FAILURE
    return make_record(level, msg, *args, name=name)


def stage_result_record(
    result: bool, msg: Any, *args: Any, name: str = RESULTS_LOGGER
) -> logging.LogRecord:
    """Like ``result_record`` but a failed stage is only a warning."""
    level = TEST_INFO if result else TEST_WARNING
    return make_record(level, msg, *args, name=name)
