"""Structured logging for homtran.

Human-readable records go to stderr so CLI output on stdout stays parseable.
An optional JSON lines file keeps the structured payload of each record.
"""

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "homtran"


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": time.time(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        data = getattr(record, "data", None)
        if data:
            log_data["data"] = data
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_path: Path | None = None, level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger.

    Args:
        log_path: Optional path for a JSON lines log file
        level: Logging level

    Returns:
        The configured ``homtran`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    )
    logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> "StructuredLogger":
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(logging.getLogger(name))


class StructuredLogger:
    """Wrapper attaching a ``data`` dict to log records."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _log(self, level: int, msg: str, data: dict[str, Any] | None = None) -> None:
        if not self.logger.isEnabledFor(level):
            return
        extra = {"data": data} if data else {}
        self.logger.log(level, msg, extra=extra)

    def debug(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.DEBUG, msg, data)

    def info(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.INFO, msg, data)

    def warning(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.WARNING, msg, data)

    def error(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.ERROR, msg, data)


__all__ = [
    "ROOT_LOGGER_NAME",
    "JSONFormatter",
    "setup_logging",
    "get_logger",
    "StructuredLogger",
]
