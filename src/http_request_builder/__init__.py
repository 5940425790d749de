"""HTTP Request Builder - fluent request assembly and execution on top of requests."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.request import Request, new_request
from .core.pipeline import DoOptions
from .core.body import RawBytes, Encodable, ByteSink, DecodeTarget
from .core.encoding import Encoding
from .core.structures import Header, Query
from .core.config import TimeoutConfig, TransportConfig
from .core.transport import (
    Transport,
    TransportRequest,
    SessionTransport,
    get_default_transport,
    set_default_transport,
)
from .core.logging import LoggingConfig
from .core.exceptions import (
    RequestBuilderException,
    MissingMethodError,
    MissingFieldError,
    URLBuildError,
    URLParseError,
    UnsupportedRequestEncodingError,
    RequestEncodeError,
    TransportError,
    TimeoutError,
    ConnectionError,
    ResponseError,
    StatusCodeError,
    UnsupportedResponseEncodingError,
    ResponseDecodeError,
)

# Users configure handlers themselves via logging.getLogger('http_request_builder')
logging.getLogger('http_request_builder').addHandler(logging.NullHandler())

try:
    __version__ = version("http-request-builder")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__license__ = "MIT"

__all__ = [
    # Builder
    "Request",
    "new_request",
    "DoOptions",

    # Bodies
    "RawBytes",
    "Encodable",
    "ByteSink",
    "DecodeTarget",
    "Encoding",
    "Header",
    "Query",

    # Transport and config
    "Transport",
    "TransportRequest",
    "SessionTransport",
    "get_default_transport",
    "set_default_transport",
    "TimeoutConfig",
    "TransportConfig",
    "LoggingConfig",

    # Exceptions
    "RequestBuilderException",
    "MissingMethodError",
    "MissingFieldError",
    "URLBuildError",
    "URLParseError",
    "UnsupportedRequestEncodingError",
    "RequestEncodeError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "ResponseError",
    "StatusCodeError",
    "UnsupportedResponseEncodingError",
    "ResponseDecodeError",

    # Version
    "__version__",
]
