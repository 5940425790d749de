"""
Log filters for correlation IDs and static fields.
"""

import logging
import threading
from typing import Any, Dict, Optional

_correlation = threading.local()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current thread."""
    _correlation.value = correlation_id


def get_correlation_id() -> Optional[str]:
    """Correlation ID of the current thread, or None."""
    return getattr(_correlation, "value", None)


def clear_correlation_id() -> None:
    """Remove the correlation ID of the current thread."""
    if hasattr(_correlation, "value"):
        del _correlation.value


class CorrelationIdFilter(logging.Filter):
    """Adds ``correlation_id`` to records when one is set for the thread."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id and not hasattr(record, "correlation_id"):
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """Adds static fields (service, environment, ...) to every record."""

    def __init__(self, fields: Dict[str, Any]):
        super().__init__()
        self.fields = dict(fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
