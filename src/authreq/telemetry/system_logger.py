"""Package logger for request building events.

This module provides a singleton logger for operational events raised while
building requests (authority resolution, validation failures, dispatch).

Logging strategy:
- Console (stderr): WARNING and above by default, human-readable
- File (JSONL): Optional, added via configure_logger_file() once the
  caller's LoggingConfig is known

Events are logged as dicts with an "event" key:
    logger.warning({"event": "request_validation_failed", "field": "account"})
Account objects and token material are never logged.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_logger_file",
    "configure_logging",
    "get_logger",
    "reset_logger",
]

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from authreq.constants import APP_NAME
from authreq.utils.file_helpers import set_secure_permissions
from authreq.utils.iso_formatter import ISO8601Formatter

if TYPE_CHECKING:
    from authreq.config import LoggingConfig


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts 'message' or 'event' field from dict messages.
    """

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


# Module-level singleton logger
_logger: logging.Logger | None = None
_file_handler: logging.FileHandler | None = None


def get_logger() -> logging.Logger:
    """Get the singleton package logger.

    Creates the logger on first call with a stderr handler only. The logger
    itself accepts DEBUG so a file handler can capture detail; the console
    handler stays at WARNING until configure_logging() changes it.

    Returns:
        logging.Logger: Configured logger instance.
    """
    global _logger

    if _logger is not None:
        return _logger

    _logger = logging.getLogger(APP_NAME)
    _logger.setLevel(logging.DEBUG)
    _logger.propagate = False

    for handler in _logger.handlers:
        handler.close()
    _logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(ConsoleFormatter())
    _logger.addHandler(stderr_handler)

    return _logger


def configure_logger_file(log_path: Path, level: int = logging.INFO) -> None:
    """Attach (or replace) the JSONL file handler.

    Args:
        log_path: Path to the JSONL log file. Parent directory is created
            with owner-only permissions.
        level: Minimum level written to the file.
    """
    global _file_handler

    logger = get_logger()

    if _file_handler is not None:
        logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None

    log_path.parent.mkdir(parents=True, exist_ok=True)
    set_secure_permissions(log_path.parent, is_directory=True)

    _file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    _file_handler.setLevel(level)
    _file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(_file_handler)


def configure_logging(config: "LoggingConfig") -> logging.Logger:
    """Apply a LoggingConfig to the package logger.

    Args:
        config: Logging section of the client configuration.

    Returns:
        logging.Logger: The configured package logger.
    """
    logger = get_logger()
    level = logging.getLevelName(config.log_level)

    for handler in logger.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)

    if config.log_file is not None:
        configure_logger_file(Path(config.log_file).expanduser(), level)

    return logger


def reset_logger() -> None:
    """Close all handlers and drop the singleton (used by tests)."""
    global _logger, _file_handler

    if _logger is not None:
        for handler in _logger.handlers:
            handler.close()
        _logger.handlers.clear()
    _logger = None
    _file_handler = None
