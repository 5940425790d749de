"""
Сборка и разбор URL.

build_url() собирает URL из отдельных полей, parse_url() разбирает строку
с проверками, которых нет в urllib.parse (управляющие символы, битые
%-последовательности, невалидный порт).
"""

import re
from typing import Optional
from urllib.parse import SplitResult, quote, urlsplit

from .exceptions import MissingFieldError, URLParseError
from .structures import Query

# Не экранируются в пути (RFC 3986 pchar без unreserved)
_PATH_SAFE = "/:@$&+,;="

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def build_url(
    scheme: str,
    host: str,
    path: str,
    query: Optional[Query] = None
) -> SplitResult:
    """
    Собрать URL из полей.

    Поля проверяются в порядке scheme, host, path - первая ошибка
    выигрывает.

    Args:
        scheme: Схема (http, https)
        host: Хост, возможно с портом
        path: Путь в неэкранированном виде
        query: Параметры запроса

    Returns:
        SplitResult; строку дает .geturl()

    Raises:
        MissingFieldError: Если scheme, host или path пустые

    Examples:
        >>> build_url("http", "example.com", "/api", Query(foo="bar")).geturl()
        'http://example.com/api?foo=bar'
    """
    if not scheme:
        raise MissingFieldError("scheme")
    if not host:
        raise MissingFieldError("host")
    if not path:
        raise MissingFieldError("path")

    return SplitResult(
        scheme=scheme,
        netloc=host,
        path=quote(path, safe=_PATH_SAFE),
        query=query.encode() if query else "",
        fragment="",
    )


def parse_url(text: str) -> SplitResult:
    """
    Разобрать строку в URL.

    Args:
        text: Абсолютный или относительный URL

    Returns:
        SplitResult с экранированным путем (как в исходной строке)

    Raises:
        URLParseError: Если строка не является валидным URL
    """
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in text):
        raise URLParseError(text, "invalid control character in URL")

    if text.startswith(":"):
        raise URLParseError(text, "missing protocol scheme")

    try:
        parsed = urlsplit(text)
        # Порт валидируется лениво, при обращении к атрибуту
        _ = parsed.port
    except ValueError as e:
        raise URLParseError(text, str(e)) from e

    for part in (parsed.netloc, parsed.path):
        if _BAD_ESCAPE.search(part):
            raise URLParseError(text, "invalid URL escape")

    return parsed


def host_of(parsed: SplitResult) -> str:
    """Хост с портом, без userinfo."""
    return parsed.netloc.rpartition("@")[2]
