# src/http_request_builder/core/request.py
"""
Fluent HTTP request builder.

Every configuration call mutates the builder and returns it, so calls can
be chained. ``do()`` runs the execution pipeline.

Example:
    >>> result = {}
    >>> response = (
    ...     Request()
    ...     .with_method("POST")
    ...     .from_url_string("https://api.example.com/v1/items")
    ...     .add_header("Content-Type", "application/json")
    ...     .add_header("Accept", "application/json")
    ...     .with_request_body({"name": "item"})
    ...     .with_response_body(result)
    ...     .do()
    ... )
"""

from typing import Any, Mapping, Optional
from urllib.parse import SplitResult, unquote

import requests

from .body import RequestBody, ResponseBody, as_request_body, as_response_body
from .config import TimeoutValue
from .encoding import Encoding, infer_encoding
from .pipeline import DoOptions, execute
from .structures import Header, Query, coerce_header, coerce_query
from .transport import Transport, get_default_transport
from .url import build_url, host_of, parse_url


class Request:
    """
    HTTP request under construction.

    Attributes:
        transport: Transport used by do() (default transport if unset)
        method: HTTP method, required by do()
        scheme, host, path: URL parts, required by url()
        query: Query parameters (multi-value)
        header: Headers (multi-value, case-insensitive)
        request_body: RawBytes, Encodable or None
        response_body: ByteSink, DecodeTarget or None

    Not thread-safe: do not configure one instance from several threads.
    """

    def __init__(self):
        self.transport: Optional[Transport] = None
        self.method: str = ""
        self.scheme: str = ""
        self.host: str = ""
        self.path: str = ""
        self.query: Optional[Query] = None
        self.header: Optional[Header] = None
        self.request_body: Optional[RequestBody] = None
        self.response_body: Optional[ResponseBody] = None

    @classmethod
    def new(cls) -> "Request":
        """Create an empty Request."""
        return cls()

    def __repr__(self) -> str:
        return (
            f"Request(method={self.method!r}, scheme={self.scheme!r}, host={self.host!r}, "
            f"path={self.path!r}, query={self.query!r}, header={self.header!r})"
        )

    def clear(self) -> "Request":
        """Reset every field to its unset value."""
        self.__init__()
        return self

    # ==================== Transport ====================

    def with_transport(self, transport: Optional[Transport]) -> "Request":
        """Set the transport."""
        self.transport = transport
        return self

    def with_default_transport(self) -> "Request":
        """Use the process-wide default transport."""
        self.transport = get_default_transport()
        return self

    def with_timeout(self, timeout: TimeoutValue) -> "Request":
        """
        Set the transport timeout.

        The timeout is applied to the whole transport. If no transport is set,
        the default transport is installed first and the timeout changes the
        shared default. None or 0 disables the timeout.
        """
        self._ensure_transport()

        self.transport.set_timeout(timeout)
        return self

    # ==================== Method and URL ====================

    def with_method(self, method: str) -> "Request":
        self.method = method
        return self

    def with_scheme(self, scheme: str) -> "Request":
        self.scheme = scheme
        return self

    def with_host(self, host: str) -> "Request":
        self.host = host
        return self

    def with_path(self, path: str) -> "Request":
        self.path = path
        return self

    def with_query(self, query: Optional[Mapping[str, Any]]) -> "Request":
        """Replace the query. Mappings are converted to Query."""
        self.query = coerce_query(query)
        return self

    def with_default_query(self) -> "Request":
        """Replace the query with an empty one."""
        return self.with_query(Query())

    def add_query(self, key: str, value: str) -> "Request":
        """Append a query value; existing values of the key are kept."""
        self._ensure_query()

        self.query.add(key, value)
        return self

    def url(self) -> SplitResult:
        """
        Build the URL from scheme, host, path and query.

        Raises:
            MissingFieldError: scheme, host or path is empty
        """
        return build_url(self.scheme, self.host, self.path, self.query)

    def from_url(self, url: SplitResult) -> "Request":
        """
        Copy scheme, host, path and query from a parsed URL.

        Empty parts of ``url`` leave the corresponding field untouched.
        """
        if url.scheme:
            self.with_scheme(url.scheme)
        host = host_of(url)
        if host:
            self.with_host(host)
        if url.path:
            self.with_path(unquote(url.path))
        query = Query.parse(url.query)
        if query:
            self.with_query(query)

        return self

    def from_url_string(self, ref: str) -> "Request":
        """
        Parse ``ref`` and copy its parts like from_url().

        Raises:
            URLParseError: ``ref`` is not a valid URL
        """
        return self.from_url(parse_url(ref))

    # ==================== Headers ====================

    def with_header(self, header: Optional[Mapping[str, Any]]) -> "Request":
        """Replace the headers. Mappings are converted to Header."""
        self.header = coerce_header(header)
        return self

    def with_default_header(self) -> "Request":
        """Replace the headers with an empty set."""
        return self.with_header(Header())

    def add_header(self, key: str, value: str) -> "Request":
        """Append a header value; the key is canonicalized."""
        self._ensure_header()

        self.header.add(key, value)
        return self

    # ==================== Bodies ====================

    def with_request_body(self, request_body: Any) -> "Request":
        """
        Set the request body.

        ``bytes`` are sent as is. Any other value is encoded at do() time
        according to the ``Content-Type`` header (or DoOptions).
        """
        self.request_body = as_request_body(request_body)
        return self

    def with_response_body(self, response_body: Any) -> "Request":
        """
        Set the response body target.

        A ``bytearray`` or an object with ``write()`` receives the raw bytes.
        Anything else is decoded according to the request's ``Accept``
        header (or DoOptions).
        """
        self.response_body = as_response_body(response_body)
        return self

    # ==================== Encoding ====================

    def infer_request_encoding(self) -> Encoding:
        """Encoding from the request's Content-Type header."""
        return infer_encoding(self.header.first("Content-Type") if self.header else "")

    def infer_response_encoding(self) -> Encoding:
        """Encoding from the request's Accept header."""
        return infer_encoding(self.header.first("Accept") if self.header else "")

    # ==================== Defaults ====================

    def _ensure_transport(self) -> None:
        if self.transport is None:
            self.with_default_transport()

    def _ensure_query(self) -> None:
        if self.query is None:
            self.with_default_query()

    def _ensure_header(self) -> None:
        if self.header is None:
            self.with_default_header()

    def _ensure(self) -> None:
        self._ensure_transport()
        self._ensure_query()
        self._ensure_header()

    # ==================== Execution ====================

    def do(self, *options: Optional[DoOptions]) -> requests.Response:
        """
        Execute the request.

        See http_request_builder.core.pipeline.execute for the sequence
        and raised exceptions.
        """
        return execute(self, *options)


def new_request() -> Request:
    """Create an empty Request."""
    return Request()
