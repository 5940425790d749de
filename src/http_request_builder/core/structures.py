"""
Multi-value containers for query parameters and headers.

Both containers map a key to an ordered list of values. ``add`` appends
(duplicates are kept), item assignment replaces. ``Header`` additionally
canonicalizes keys the way HTTP header names are conventionally written,
so ``content-type`` and ``Content-Type`` address the same entry.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode

Values = Union[str, Iterable[str]]

# RFC 7230 token characters
_TOKEN_CHARS = frozenset(
    "!#$%&'*+-.^_`|~"
    "0123456789"
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


def canonical_header_key(key: str) -> str:
    """
    Return the canonical form of a header name.

    The first letter and every letter following a hyphen are upper-cased,
    the rest lower-cased. Keys containing characters that are not valid in
    a header name are returned unchanged.

    Examples:
        >>> canonical_header_key("content-type")
        'Content-Type'
        >>> canonical_header_key("X-REQUEST-ID")
        'X-Request-Id'
    """
    if not key or any(char not in _TOKEN_CHARS for char in key):
        return key

    result = []
    upper = True
    for char in key:
        result.append(char.upper() if upper else char.lower())
        upper = char == "-"
    return "".join(result)


def _as_list(values: Values) -> List[str]:
    if isinstance(values, str):
        return [values]
    return list(values)


class MultiValueDict(MutableMapping):
    """Ordered mapping of ``str`` to ``list[str]``."""

    def __init__(self, data: Optional[Union[Mapping, Iterable[Tuple[str, Values]]]] = None, **kwargs: Values):
        self._store: Dict[str, List[str]] = {}
        if data is not None:
            self.update(data)
        if kwargs:
            self.update(kwargs)

    def _normalize_key(self, key: str) -> str:
        return key

    def __getitem__(self, key: str) -> List[str]:
        return self._store[self._normalize_key(key)]

    def __setitem__(self, key: str, values: Values) -> None:
        self._store[self._normalize_key(key)] = _as_list(values)

    def __delitem__(self, key: str) -> None:
        del self._store[self._normalize_key(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._normalize_key(key) in self._store

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._store!r})"

    def add(self, key: str, value: str) -> None:
        """Append a value to the key, keeping existing values."""
        self._store.setdefault(self._normalize_key(key), []).append(value)

    def set(self, key: str, value: str) -> None:
        """Replace all values of the key with a single value."""
        self._store[self._normalize_key(key)] = [value]

    def first(self, key: str, default: str = "") -> str:
        """Return the first value of the key, or ``default``."""
        values = self._store.get(self._normalize_key(key))
        if not values:
            return default
        return values[0]

    def copy(self):
        return self.__class__({key: list(values) for key, values in self._store.items()})


class Query(MultiValueDict):
    """
    URL query parameters.

    Example:
        >>> query = Query()
        >>> query.add("tag", "b")
        >>> query.add("tag", "a")
        >>> query.add("page", "2")
        >>> query.encode()
        'page=2&tag=b&tag=a'
    """

    @classmethod
    def parse(cls, query_string: str) -> "Query":
        """Parse an encoded query string, keeping blank values."""
        query = cls()
        for key, value in parse_qsl(query_string, keep_blank_values=True):
            query.add(key, value)
        return query

    def encode(self) -> str:
        """
        Encode as ``application/x-www-form-urlencoded``.

        Keys are sorted, values of a key keep their insertion order.
        """
        return urlencode([
            (key, value)
            for key in sorted(self._store)
            for value in self._store[key]
        ])


class Header(MultiValueDict):
    """
    Case-insensitive HTTP header multi-map.

    Example:
        >>> header = Header()
        >>> header.add("accept", "application/json")
        >>> header["Accept"]
        ['application/json']
    """

    def _normalize_key(self, key: str) -> str:
        return canonical_header_key(key)

    def to_requests(self) -> Dict[str, str]:
        """Flatten to the single-value dict ``requests`` expects."""
        return {key: ", ".join(values) for key, values in self._store.items() if values}


def coerce_query(value: Any) -> Optional[Query]:
    if value is None or isinstance(value, Query):
        return value
    return Query(value)


def coerce_header(value: Any) -> Optional[Header]:
    if value is None or isinstance(value, Header):
        return value
    return Header(value)
