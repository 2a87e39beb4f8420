"""Tests for structured logging helpers."""

import json
import logging
from pathlib import Path

from homtran.core.logging import JSONFormatter, StructuredLogger, get_logger, setup_logging


def test_json_formatter_includes_data():
    record = logging.LogRecord("homtran.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.data = {"frames": 3}

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["name"] == "homtran.test"
    assert payload["data"] == {"frames": 3}


def test_json_formatter_without_data():
    record = logging.LogRecord("homtran.test", logging.DEBUG, __file__, 1, "plain", None, None)
    payload = json.loads(JSONFormatter().format(record))
    assert "data" not in payload


def test_setup_logging_writes_json_lines(tmp_path: Path):
    log_path = tmp_path / "nested" / "log.jsonl"
    logger = setup_logging(log_path, level=logging.DEBUG)
    assert logger.name == "homtran"

    get_logger("homtran.core.test").debug("Decoded matrix", {"shape": [4, 4]})
    for handler in logger.handlers:
        handler.flush()

    lines = log_path.read_text().splitlines()
    assert json.loads(lines[-1])["data"] == {"shape": [4, 4]}


def test_setup_logging_replaces_handlers(tmp_path: Path):
    setup_logging(tmp_path / "a.jsonl")
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_get_logger_wraps_standard_logger():
    structured = get_logger("homtran.core.transform")
    assert isinstance(structured, StructuredLogger)
    assert structured.logger is logging.getLogger("homtran.core.transform")
