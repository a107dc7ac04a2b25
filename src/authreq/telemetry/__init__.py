"""Logging for authreq."""

from authreq.telemetry.system_logger import (
    ConsoleFormatter,
    configure_logger_file,
    configure_logging,
    get_logger,
    reset_logger,
)

__all__ = [
    "ConsoleFormatter",
    "configure_logger_file",
    "configure_logging",
    "get_logger",
    "reset_logger",
]
