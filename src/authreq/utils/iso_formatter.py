"""JSONL log formatting with ISO 8601 timestamps."""

from __future__ import annotations

__all__ = ["ISO8601Formatter"]

import json
import logging
from datetime import datetime, timezone


class ISO8601Formatter(logging.Formatter):
    """Formats records as one JSON object per line, UTC timestamp first.

    Format: {"time": "2025-12-04T10:48:37.123Z", "level": "WARNING", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSONL.

        Args:
            record: The log record to format.

        Returns:
            str: JSON-formatted log entry.
        """
        timestamp = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

        if isinstance(record.msg, dict):
            log_data = record.msg
        else:
            log_data = {"message": record.getMessage()}

        log_entry = {"time": timestamp, "level": record.levelname, "logger": record.name, **log_data}
        # Enum and UUID values fall back to str()
        return json.dumps(log_entry, default=str)
