"""
Tagged request and response body variants.

The builder accepts untyped payloads and tags them once, at set time.
The execution pipeline then dispatches on the tag only.

Request body:
    RawBytes   - sent verbatim, no codec involved
    Encodable  - encoded with the resolved codec

Response body:
    ByteSink      - receives the raw response bytes
    DecodeTarget  - populated by the resolved codec
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class RawBytes:
    """Request payload sent exactly as given."""
    data: bytes


@dataclass(frozen=True)
class Encodable:
    """Request payload that must be encoded before sending."""
    value: Any


RequestBody = Union[RawBytes, Encodable]


@dataclass
class ByteSink:
    """
    Raw response bytes destination.

    A ``bytearray`` target has its contents replaced, any other target
    must provide ``write(bytes)``.
    """
    target: Any

    def receive(self, content: bytes) -> None:
        if isinstance(self.target, bytearray):
            self.target[:] = content
        else:
            self.target.write(content)


@dataclass
class DecodeTarget:
    """
    Decoded response destination.

    ``target`` is filled in place by the codec (``dict`` is updated,
    ``list`` is replaced, other objects get attributes). ``target`` may be
    ``None``: the decoded value is then only available as ``value``.
    """
    target: Any = None
    value: Any = field(default=None, compare=False)


ResponseBody = Union[ByteSink, DecodeTarget]


def as_request_body(payload: Any) -> Optional[RequestBody]:
    """
    Tag a request payload.

    Examples:
        >>> as_request_body(b"raw")
        RawBytes(data=b'raw')
        >>> as_request_body({"foo": "bar"})
        Encodable(value={'foo': 'bar'})
    """
    if payload is None or isinstance(payload, (RawBytes, Encodable)):
        return payload
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return RawBytes(bytes(payload))
    return Encodable(payload)


def as_response_body(target: Any) -> Optional[ResponseBody]:
    """Tag a response body target."""
    if target is None or isinstance(target, (ByteSink, DecodeTarget)):
        return target
    if isinstance(target, bytearray) or callable(getattr(target, "write", None)):
        return ByteSink(target)
    return DecodeTarget(target)
