"""
Pytest configuration and fixtures for http-request-builder tests.
"""

from typing import List, Optional

import pytest
import requests
import responses as responses_lib

from src.http_request_builder.core.config import TimeoutConfig
from src.http_request_builder.core.transport import (
    Transport,
    TransportRequest,
    set_default_transport,
)


class RecordingTransport(Transport):
    """Transport that records requests and answers with a canned response."""

    def __init__(self, status_code: int = 200, content: bytes = b"", error: Optional[Exception] = None):
        self.status_code = status_code
        self.content = content
        self.error = error
        self.requests: List[TransportRequest] = []
        self._timeout: Optional[TimeoutConfig] = None

    @property
    def timeout(self) -> Optional[TimeoutConfig]:
        return self._timeout

    def set_timeout(self, timeout) -> None:
        self._timeout = TimeoutConfig.from_value(timeout) if timeout is not None else None

    def send(self, request: TransportRequest) -> requests.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error

        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.content
        response.url = request.url
        return response


@pytest.fixture(autouse=True)
def reset_default_transport():
    """Every test starts and ends without a default transport."""
    set_default_transport(None)
    yield
    set_default_transport(None)


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def recording_transport():
    """Factory for RecordingTransport."""
    def factory(status_code: int = 200, content: bytes = b"", error: Optional[Exception] = None):
        return RecordingTransport(status_code=status_code, content=content, error=error)
    return factory
