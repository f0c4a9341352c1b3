"""Structured logging for crack parameter handling.

Console output is plain text; an optional JSON lines file keeps the structured
data attached to each record (applied overrides, diagnostics) for later analysis.
"""

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

from .verbosity import Verbosity, logging_level


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": time.time(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(
    log_path: Path | None = None,
    level: int = logging.WARNING,
    stream=None,
    console_level: int | None = None,
) -> None:
    """Setup structured logging.

    Args:
        log_path: Optional path for JSON lines log file
        level: Logging level
        stream: Console stream, stderr by default so that rendered output on
            stdout stays clean
        console_level: Level for the console handler, ``level`` by default;
            the JSON lines file always records at ``level``
    """
    root_logger = logging.getLogger()
    if console_level is None:
        console_level = level
    root_logger.setLevel(min(level, console_level))

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(console_level)
    console_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)


def setup_logging_for(verbosity: Verbosity, log_path: Path | None = None) -> None:
    """Setup logging at the level matching an ``io_verbosity`` value."""
    setup_logging(log_path, level=logging_level(verbosity))


def get_logger(name: str) -> "StructuredLogger":
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(logging.getLogger(name))


class StructuredLogger:
    """Wrapper for adding structured data to log messages."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _log(self, level: int, msg: str, data: dict[str, Any] | None = None) -> None:
        extra = {"extra_data": data} if data else {}
        self.logger.log(level, msg, extra=extra)

    def isEnabledFor(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def debug(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.DEBUG, msg, data)

    def info(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.INFO, msg, data)

    def warning(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.WARNING, msg, data)


__all__ = [
    "JSONFormatter",
    "setup_logging",
    "setup_logging_for",
    "get_logger",
    "StructuredLogger",
]
