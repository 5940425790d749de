"""
Log formatters: JSON and plain text.

Both formatters render the ``extra`` fields passed to a log call.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict

# Attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the non-standard attributes of a record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Example output:
        {"timestamp": "2024-01-15T10:30:45.123", "level": "INFO",
         "logger": "http_request_builder", "message": "Request completed",
         "method": "GET", "status_code": 200}
    """

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data.update(extra_fields(record))

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, default=str)


class TextFormatter(logging.Formatter):
    """
    ``[timestamp] [level] [logger] message key=value ...``
    """

    def __init__(self):
        super().__init__(
            fmt="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = " ".join(f"{key}={value}" for key, value in extra_fields(record).items())
        if fields:
            message += " " + fields
        return message


_FORMATTERS = {
    "json": JSONFormatter,
    "text": TextFormatter,
}


def get_formatter(format_type: str) -> logging.Formatter:
    """
    Get formatter by name.

    Raises:
        ValueError: If format_type is unknown
    """
    formatter_class = _FORMATTERS.get(format_type.lower())
    if formatter_class is None:
        raise ValueError(
            f"Unknown format type: {format_type}. "
            f"Available: {', '.join(_FORMATTERS)}"
        )
    return formatter_class()
