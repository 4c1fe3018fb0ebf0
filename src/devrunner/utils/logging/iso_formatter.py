"""Log formatting for JSONL output."""

from __future__ import annotations

__all__ = ["ISO8601Formatter"]

import json
import logging
from datetime import datetime, timezone


class ISO8601Formatter(logging.Formatter):
    """Formats records as JSON lines with an ISO 8601 UTC timestamp.

    Format: YYYY-MM-DDTHH:MM:SS.sssZ
    Example: {"time": "2025-12-04T10:48:37.123Z", "level": "INFO", "event": ...}

    Dict messages are merged into the entry; anything else becomes "message".
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

        if isinstance(record.msg, dict):
            log_data = record.msg
        else:
            log_data = {"message": record.getMessage()}

        log_entry = {
            "time": timestamp,
            "level": record.levelname,
            "logger": record.name,
            **log_data,
        }
        # default=str keeps Paths and enums serializable
        return json.dumps(log_entry, default=str)
