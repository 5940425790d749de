"""
Structured logging for Request Builder.

Example:
    >>> from http_request_builder.core.logging import LoggingConfig, RequestLogger
    >>> logger = RequestLogger(LoggingConfig.create(level="DEBUG", format="json"))
    >>> logger.info("Request started", method="GET", url="https://api.example.com/v1")
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import RequestLogger
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "RequestLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
]
