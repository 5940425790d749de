"""
Иерархия исключений Request Builder.

Классификация:
- BuildError - запрос собран не полностью (метод, URL)
- EncodingError - тело запроса не удалось закодировать
- TransportError - запрос не дошел до сервера или ответ не получен
- ResponseError - ответ получен, но он неуспешный или не декодируется
"""

from typing import Any, Optional

import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestBuilderException(Exception):
    """Базовое исключение Request Builder."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# СБОРКА ЗАПРОСА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class BuildError(RequestBuilderException):
    """Запрос не может быть собран из текущих полей."""
    pass

class MissingMethodError(BuildError):
    """Не указан HTTP метод."""

    def __init__(self, message: str = "must provide method"):
        super().__init__(message)

class MissingFieldError(BuildError):
    """
    Не указано обязательное поле URL.

    Args:
        field: Имя поля ('scheme', 'host' или 'path')
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"must provide {field}")

class URLBuildError(BuildError):
    """
    Ошибка построения URL внутри do().

    Исходная ошибка доступна через __cause__.

    Args:
        message: Сообщение
        field: Поле, которого не хватило (если известно)
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)

class URLParseError(BuildError):
    """
    Строку не удалось разобрать как URL.

    Args:
        url: Исходная строка
        reason: Причина
    """

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason

        msg = f"error parsing URL {url!r}"
        if reason:
            msg += f": {reason}"

        super().__init__(msg)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# КОДИРОВАНИЕ ТЕЛА ЗАПРОСА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class EncodingError(RequestBuilderException):
    """Базовая ошибка кодирования тела запроса."""
    pass

class UnsupportedRequestEncodingError(EncodingError):
    """
    Для тела запроса не найден кодек.

    Args:
        encoding: Выбранная кодировка (пустая строка - не определена)
    """

    def __init__(self, encoding: Any):
        self.encoding = encoding
        super().__init__(
            f"unable to encode request body (encoding: {str(encoding) or 'unknown'})"
        )

class RequestEncodeError(EncodingError):
    """Кодек не смог закодировать тело запроса."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(RequestBuilderException):
    """
    Ошибка транспорта (сеть, соединение, таймаут).

    Единственная ошибка, при которой частичный ответ (если он есть)
    возвращается вместе с исключением.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        response: Частичный ответ, если транспорт его вернул
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        response: Optional[requests.Response] = None
    ):
        self.url = url
        self.response = response

        full_message = message
        if url:
            full_message += f" (url: {url})"

        super().__init__(full_message)

class TimeoutError(TransportError):
    """Таймаут запроса."""
    pass

class ConnectionError(TransportError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - DNS resolution failed
    """
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОТВЕТ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ResponseError(RequestBuilderException):
    """
    Ответ получен, но обработать его как успешный нельзя.

    Args:
        message: Сообщение
        response: Полученный ответ
    """

    def __init__(self, message: str, response: Optional[requests.Response] = None):
        self.response = response
        super().__init__(message)

class StatusCodeError(ResponseError):
    """
    Неожиданный HTTP статус (>= 300).

    Не прерывает декодирование тела ответа: тело ошибки (например, JSON)
    доступно в целевом объекте, даже если поднят StatusCodeError.

    Args:
        status_code: HTTP статус код
        response: Полученный ответ
    """

    def __init__(self, status_code: int, response: Optional[requests.Response] = None):
        self.status_code = status_code
        super().__init__(f"received status code {status_code}", response)

class UnsupportedResponseEncodingError(ResponseError):
    """Для тела ответа не найден кодек."""

    def __init__(self, encoding: Any, response: Optional[requests.Response] = None):
        self.encoding = encoding
        super().__init__(
            f"unable to decode response body (encoding: {str(encoding) or 'unknown'})",
            response
        )

class ResponseDecodeError(ResponseError):
    """
    Тело ответа не декодируется.

    Примеры:
    - Битый JSON
    - Пустое тело при ожидаемом JSON
    - JSON массив при целевом словаре
    """
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_transport_exception(
    exc: requests.RequestException,
    url: str
) -> TransportError:
    """
    Конвертировать requests.exceptions в наши исключения.

    Args:
        exc: Исключение из requests
        url: URL запроса

    Returns:
        TransportError (или подкласс) с частичным ответом из exc.response

    Examples:
        >>> exc = requests.exceptions.ConnectTimeout()
        >>> our_exc = classify_transport_exception(exc, "https://example.com")
        >>> assert isinstance(our_exc, TimeoutError)
    """
    response = getattr(exc, "response", None)

    if isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("Request timeout", url, response)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError("Connection error", url, response)

    else:
        return TransportError(f"error making http request: {exc}", url, response)
