"""Tests for structured logging helpers."""

import io
import json
import logging
from pathlib import Path

from crackparams.core.logging import JSONFormatter, get_logger, setup_logging, setup_logging_for
from crackparams.core.verbosity import Verbosity


def test_json_formatter_includes_extra_data():
    record = logging.LogRecord("crackparams.test", logging.WARNING, __file__, 1, "bad %s", ("value",), None)
    record.extra_data = {"key": "crack_width", "raw": "abc"}
    data = json.loads(JSONFormatter().format(record))
    assert data["message"] == "bad value"
    assert data["level"] == "WARNING"
    assert data["key"] == "crack_width"


def test_structured_logger_writes_json_lines(tmp_path: Path):
    log_path = tmp_path / "out" / "log.jsonl"
    setup_logging(log_path, level=logging.DEBUG, stream=io.StringIO())

    get_logger("crackparams.test").debug("applied", {"key": "md_time_step"})
    for handler in logging.getLogger().handlers:
        handler.flush()

    line = json.loads(log_path.read_text().splitlines()[-1])
    assert line["message"] == "applied"
    assert line["key"] == "md_time_step"


def test_console_level_separate_from_file(tmp_path: Path):
    log_path = tmp_path / "log.jsonl"
    console = io.StringIO()
    setup_logging(log_path, level=logging.WARNING, stream=console, console_level=logging.ERROR)

    get_logger("crackparams.test").warning("skipped attribute", {"key": "crack_width"})
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert console.getvalue() == ""
    line = json.loads(log_path.read_text().splitlines()[-1])
    assert line["message"] == "skipped attribute"
    assert line["key"] == "crack_width"


def test_setup_logging_for_verbosity():
    setup_logging_for(Verbosity.SILENT)
    assert logging.getLogger().level == logging.WARNING
    setup_logging_for(Verbosity.NERD)
    assert logging.getLogger().level == logging.DEBUG
