"""Core Request Builder modules."""

from .body import ByteSink, DecodeTarget, Encodable, RawBytes
from .config import TimeoutConfig, TransportConfig
from .encoding import Codec, Encoding, JSONCodec, get_codec, infer_encoding
from .exceptions import (
    RequestBuilderException,
    BuildError,
    MissingMethodError,
    MissingFieldError,
    URLBuildError,
    URLParseError,
    EncodingError,
    UnsupportedRequestEncodingError,
    RequestEncodeError,
    TransportError,
    TimeoutError,
    ConnectionError,
    ResponseError,
    StatusCodeError,
    UnsupportedResponseEncodingError,
    ResponseDecodeError,
    classify_transport_exception,
)
from .pipeline import DoOptions, execute, join_options
from .request import Request, new_request
from .structures import Header, Query, canonical_header_key
from .transport import (
    SessionTransport,
    Transport,
    TransportRequest,
    get_default_transport,
    set_default_transport,
)
from .url import build_url, parse_url

__all__ = [
    # Builder
    "Request",
    "new_request",
    "DoOptions",
    "execute",
    "join_options",
    # Bodies
    "RawBytes",
    "Encodable",
    "ByteSink",
    "DecodeTarget",
    # Encoding
    "Encoding",
    "Codec",
    "JSONCodec",
    "get_codec",
    "infer_encoding",
    # URL and containers
    "build_url",
    "parse_url",
    "Query",
    "Header",
    "canonical_header_key",
    # Transport
    "Transport",
    "TransportRequest",
    "SessionTransport",
    "get_default_transport",
    "set_default_transport",
    # Config
    "TimeoutConfig",
    "TransportConfig",
    # Exceptions
    "RequestBuilderException",
    "BuildError",
    "MissingMethodError",
    "MissingFieldError",
    "URLBuildError",
    "URLParseError",
    "EncodingError",
    "UnsupportedRequestEncodingError",
    "RequestEncodeError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "ResponseError",
    "StatusCodeError",
    "UnsupportedResponseEncodingError",
    "ResponseDecodeError",
    "classify_transport_exception",
]
