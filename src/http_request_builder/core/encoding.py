"""
Encoding resolution and body codecs.

Encodings are resolved from a content-type value by exact match. Only JSON
is wired in; everything else resolves to ``Encoding.UNKNOWN`` and is
rejected by the execution pipeline.
"""

import dataclasses
import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional


class Encoding(str, Enum):
    """Body encodings."""
    UNKNOWN = ""
    JSON = "JSON"

    def __str__(self) -> str:
        return self.value


# Exact content-type match, parameters are not stripped
_CONTENT_TYPES: Dict[str, Encoding] = {
    "application/json": Encoding.JSON,
}


def infer_encoding(content_type: Optional[str]) -> Encoding:
    """
    Map a content-type value to an encoding.

    Examples:
        >>> infer_encoding("application/json")
        <Encoding.JSON: 'JSON'>
        >>> infer_encoding("application/json; charset=utf-8")
        <Encoding.UNKNOWN: ''>
    """
    return _CONTENT_TYPES.get(content_type or "", Encoding.UNKNOWN)


class Codec(ABC):
    """Encodes request payloads and decodes response payloads."""

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Serialize ``value``. Raises TypeError/ValueError if not representable."""

    @abstractmethod
    def decode(self, data: bytes, target: Any) -> Any:
        """
        Deserialize ``data`` into ``target`` and return the decoded value.

        Raises ValueError on malformed data and TypeError when the decoded
        value does not fit the target.
        """


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JSONCodec(Codec):
    """
    JSON codec on top of the stdlib ``json`` module.

    Output is compact UTF-8 (``{"foo":"bar"}``). NaN and infinity are
    rejected. Dataclass instances are encoded as objects.
    """

    def encode(self, value: Any) -> bytes:
        return json.dumps(
            value,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            default=_json_default,
        ).encode("utf-8")

    def decode(self, data: bytes, target: Any) -> Any:
        value = json.loads(data)

        # null leaves the target untouched
        if target is None or value is None:
            return value

        if isinstance(target, dict):
            if not isinstance(value, dict):
                raise TypeError(f"cannot decode JSON {type(value).__name__} into dict")
            target.update(value)
        elif isinstance(target, list):
            if not isinstance(value, list):
                raise TypeError(f"cannot decode JSON {type(value).__name__} into list")
            target[:] = value
        else:
            if not isinstance(value, dict):
                raise TypeError(
                    f"cannot decode JSON {type(value).__name__} into {type(target).__name__}"
                )
            for key, item in value.items():
                setattr(target, key, item)

        return value


_CODECS: Dict[Encoding, Codec] = {
    Encoding.JSON: JSONCodec(),
}


def get_codec(encoding: Encoding) -> Optional[Codec]:
    """Return the codec registered for ``encoding``, or None."""
    return _CODECS.get(encoding)
