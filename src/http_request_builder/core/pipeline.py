# src/http_request_builder/core/pipeline.py
"""
Execution pipeline behind Request.do().

Order of operations:
    options -> defaults -> method -> URL -> request body -> transport
    -> status check -> response body

A status >= 300 does not stop the response body from being read: the
StatusCodeError is raised only after decoding, so structured error bodies
end up in the target. A decoding failure is raised immediately and
therefore replaces a pending StatusCodeError.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

import requests

from .body import ByteSink, DecodeTarget, Encodable, RawBytes
from .encoding import Encoding, get_codec
from .exceptions import (
    MissingFieldError,
    MissingMethodError,
    RequestEncodeError,
    ResponseDecodeError,
    StatusCodeError,
    TransportError,
    URLBuildError,
    UnsupportedRequestEncodingError,
    UnsupportedResponseEncodingError,
    classify_transport_exception,
)
from .transport import TransportRequest

if TYPE_CHECKING:
    from .request import Request

logger = logging.getLogger(__name__)

EncodingValue = Union[Encoding, str]


@dataclass(frozen=True)
class DoOptions:
    """
    Per-call codec overrides.

    An empty value means "infer from the request headers".

    Example:
        >>> request.do(DoOptions(response_encoding=Encoding.JSON))
    """
    request_encoding: EncodingValue = Encoding.UNKNOWN
    response_encoding: EncodingValue = Encoding.UNKNOWN


def join_options(*options: Optional[DoOptions]) -> DoOptions:
    """
    Merge option sets left to right; the first non-empty value per field wins.

    Example:
        >>> join_options(
        ...     DoOptions(request_encoding=Encoding.JSON),
        ...     DoOptions(request_encoding="XML", response_encoding=Encoding.JSON),
        ... )
        DoOptions(request_encoding=<Encoding.JSON: 'JSON'>, response_encoding=<Encoding.JSON: 'JSON'>)
    """
    request_encoding: EncodingValue = Encoding.UNKNOWN
    response_encoding: EncodingValue = Encoding.UNKNOWN

    for option in options:
        if option is None:
            continue
        if not request_encoding:
            request_encoding = option.request_encoding
        if not response_encoding:
            response_encoding = option.response_encoding

    return DoOptions(request_encoding=request_encoding, response_encoding=response_encoding)


def execute(request: "Request", *options: Optional[DoOptions]) -> requests.Response:
    """
    Execute a built request.

    Returns:
        The transport response (status < 300)

    Raises:
        MissingMethodError: No method set
        URLBuildError: scheme, host or path missing
        UnsupportedRequestEncodingError: No codec for a non-bytes body
        RequestEncodeError: Codec failed on the body
        TransportError: The transport failed; ``response`` may be set
        UnsupportedResponseEncodingError: No codec for the decode target
        ResponseDecodeError: Codec failed on the response body
        StatusCodeError: Status >= 300, raised after the body was read
    """
    opts = join_options(*options)

    request._ensure()

    if not request.method:
        raise MissingMethodError()

    try:
        url = request.url().geturl()
    except MissingFieldError as e:
        raise URLBuildError(f"error building URL: {e}", field=e.field) from e

    body = _encode_request_body(request, opts)

    logger.debug("Sending %s %s (%d bytes)", request.method, url, len(body))

    try:
        response = request.transport.send(TransportRequest(
            method=request.method,
            url=url,
            header=request.header,
            body=body,
        ))
    except TransportError:
        raise
    except requests.RequestException as e:
        raise classify_transport_exception(e, url) from e

    pending: Optional[StatusCodeError] = None
    if response.status_code // 100 > 2:
        pending = StatusCodeError(response.status_code, response)

    if request.response_body is not None:
        _read_response_body(request, opts, response)

    if pending is not None:
        raise pending

    return response


def _encode_request_body(request: "Request", opts: DoOptions) -> bytes:
    body = request.request_body

    if body is None:
        return b""

    if isinstance(body, RawBytes):
        return body.data

    if isinstance(body, Encodable):
        encoding = opts.request_encoding or request.infer_request_encoding()
        codec = get_codec(encoding)
        if codec is None:
            raise UnsupportedRequestEncodingError(encoding)

        try:
            return codec.encode(body.value)
        except (TypeError, ValueError, RecursionError) as e:
            raise RequestEncodeError(f"error encoding request body: {e}") from e

    raise TypeError(f"unsupported request body type: {type(body).__name__}")


def _read_response_body(request: "Request", opts: DoOptions, response: requests.Response) -> None:
    target = request.response_body

    if isinstance(target, ByteSink):
        target.receive(response.content)
        return

    if isinstance(target, DecodeTarget):
        # Inferred from the request's Accept header, not the response Content-Type
        encoding = opts.response_encoding or request.infer_response_encoding()
        codec = get_codec(encoding)
        if codec is None:
            raise UnsupportedResponseEncodingError(encoding, response)

        try:
            target.value = codec.decode(response.content, target.target)
        except (TypeError, ValueError, AttributeError, RecursionError) as e:
            raise ResponseDecodeError(f"error decoding response body: {e}", response) from e
        return

    raise TypeError(f"unsupported response body type: {type(target).__name__}")
