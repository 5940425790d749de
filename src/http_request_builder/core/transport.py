# src/http_request_builder/core/transport.py
"""
Transport capability.

A transport sends a fully formed TransportRequest and returns a
``requests.Response``. Network failures surface as
``requests.RequestException`` (or TransportError for custom transports);
the execution pipeline classifies them.

The process-wide default transport is created lazily by
get_default_transport(). It is shared by every builder that adopts it and
is not synchronized: its thread-safety is that of ``requests.Session``.
"""

import itertools
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import requests

from .config import TimeoutConfig, TimeoutValue, TransportConfig
from .logging import RequestLogger
from .structures import Header
from ..utils.sanitizer import mask_headers, sanitize_url

logger = logging.getLogger(__name__)

# Logger name suffix, unique per SessionTransport
_transport_ids = itertools.count(1)


@dataclass
class TransportRequest:
    """Request as handed to a transport."""
    method: str
    url: str
    header: Header = field(default_factory=Header)
    body: bytes = b""


class Transport(ABC):
    """Base class for transports."""

    @property
    @abstractmethod
    def timeout(self) -> Optional[TimeoutConfig]:
        """Timeout applied to every request, None for no timeout."""

    @abstractmethod
    def set_timeout(self, timeout: Optional[TimeoutValue]) -> None:
        """Replace the timeout for all subsequent requests."""

    @abstractmethod
    def send(self, request: TransportRequest) -> requests.Response:
        """Send the request and return the response."""


class SessionTransport(Transport):
    """
    Transport backed by a ``requests.Session``.

    Redirects, connection pooling and proxies from the environment are
    handled by ``requests``.

    Example:
        >>> config = TransportConfig.create(timeout=10)
        >>> with SessionTransport(config) as transport:
        ...     response = transport.send(TransportRequest("GET", "https://api.example.com/v1"))
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        session: Optional[requests.Session] = None
    ):
        self._config = config or TransportConfig()
        self._owns_session = session is None
        self._session = session if session is not None else self._create_session()

        self._logger: Optional[RequestLogger] = None
        if self._config.logging:
            self._logger = RequestLogger(
                config=self._config.logging,
                name=f"http_request_builder.transport.{next(_transport_ids)}"
            )

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        if self._config.headers:
            session.headers.update(self._config.headers)
        return session

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def timeout(self) -> Optional[TimeoutConfig]:
        return self._config.timeout

    def set_timeout(self, timeout: Optional[TimeoutValue]) -> None:
        self._config = self._config.with_timeout(timeout)

    def send(self, request: TransportRequest) -> requests.Response:
        prepared = self._session.prepare_request(requests.Request(
            method=request.method,
            url=request.url,
            headers=request.header.to_requests(),
            data=request.body or None,
        ))
        settings = self._session.merge_environment_settings(prepared.url, {}, None, None, None)
        timeout = self._config.timeout.as_tuple() if self._config.timeout else None
        safe_url = sanitize_url(request.url)

        if self._logger:
            self._logger.info(
                "Request started",
                method=request.method,
                url=safe_url,
                headers=mask_headers(request.header),
                body_size=len(request.body),
            )

        start_time = time.time()
        try:
            response = self._session.send(prepared, timeout=timeout, allow_redirects=True, **settings)
        except requests.RequestException as e:
            if self._logger:
                self._logger.error(
                    "Request failed",
                    method=request.method,
                    url=safe_url,
                    error_type=type(e).__name__,
                    error=str(e),
                    duration_ms=round((time.time() - start_time) * 1000, 2),
                )
            raise

        if self._logger:
            self._logger.info(
                "Request completed",
                method=request.method,
                url=safe_url,
                status_code=response.status_code,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )

        return response

    def close(self) -> None:
        """Close the session (if owned) and the logger."""
        if self._logger is not None:
            self._logger.close()
        if self._owns_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


_default_transport: Optional[Transport] = None


def get_default_transport() -> Transport:
    """Process-wide default transport, created on first call."""
    global _default_transport

    if _default_transport is None:
        _default_transport = SessionTransport()
        logger.debug("Default transport created")

    return _default_transport


def set_default_transport(transport: Optional[Transport]) -> None:
    """
    Replace the process-wide default transport.

    ``None`` drops the current one; the next get_default_transport() call
    creates a fresh SessionTransport.
    """
    global _default_transport
    _default_transport = transport
