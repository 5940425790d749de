"""
Structured logger used by the transport.

Keyword arguments of every log call become record fields (``extra``)
after sensitive values are masked.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, List, Optional

from .config import LoggingConfig
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .formatters import get_formatter
from ...utils.sanitizer import mask_sensitive_data


class RequestLogger:
    """
    Logger with console/file handlers built from a LoggingConfig.

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json")
        >>> with RequestLogger(config) as logger:
        ...     logger.info("Request completed", status_code=200, duration_ms=12.5)
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "http_request_builder"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = getattr(logging, self.config.level.value)

        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()

        filters: List[logging.Filter] = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._add_handler(logging.StreamHandler(sys.stdout), level, formatter, filters)

        if self.config.enable_file and self.config.file_path:
            Path(self.config.file_path).parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=self.config.file_path,
                maxBytes=self.config.max_bytes,
                backupCount=self.config.backup_count,
                encoding="utf-8"
            )
            self._add_handler(file_handler, level, formatter, filters)

    def _add_handler(
        self,
        handler: logging.Handler,
        level: int,
        formatter: logging.Formatter,
        filters: List[logging.Filter]
    ) -> None:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        for f in filters:
            handler.addFilter(f)
        self._logger.addHandler(handler)

    def _log(self, level: int, message: str, fields: Any, exc_info: bool = False) -> None:
        self._logger.log(level, message, extra=mask_sensitive_data(fields), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log at ERROR level with the current exception's traceback."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def close(self) -> None:
        """Flush and close all handlers. Safe to call more than once."""
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
