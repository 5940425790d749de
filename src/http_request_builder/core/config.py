"""
Конфигурация транспорта.

Все конфиги immutable (frozen dataclasses). Изменение = новый экземпляр.
"""

from dataclasses import dataclass, field, replace
from datetime import timedelta
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .logging import LoggingConfig

TimeoutValue = Union[int, float, Tuple[float, float], timedelta, "TimeoutConfig"]

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов.

    Args:
        connect: Таймаут подключения (сек)
        read: Таймаут чтения данных (сек)

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
        >>> TimeoutConfig.from_value(10)
        >>> TimeoutConfig.from_value(timedelta(seconds=2))
    """
    connect: float = 5
    read: float = 30

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise ValueError("connect timeout must be positive")
        if self.read <= 0:
            raise ValueError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)

    @classmethod
    def from_value(cls, value: TimeoutValue) -> "TimeoutConfig":
        """
        Привести значение таймаута к TimeoutConfig.

        Число и timedelta задают одинаковый connect и read,
        кортеж - (connect, read).
        """
        if isinstance(value, TimeoutConfig):
            return value
        if isinstance(value, timedelta):
            seconds = value.total_seconds()
            return cls(connect=seconds, read=seconds)
        if isinstance(value, tuple):
            return cls(connect=value[0], read=value[1])
        return cls(connect=value, read=value)

def _as_timeout(value: Optional[TimeoutValue]) -> Optional[TimeoutConfig]:
    """None и нулевое значение (0, timedelta(0)) - без таймаута."""
    if value is None:
        return None
    if isinstance(value, (int, float, timedelta)) and not value:
        return None
    return TimeoutConfig.from_value(value)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TRANSPORT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TransportConfig:
    """
    Конфигурация SessionTransport.

    Args:
        timeout: Таймауты (None или 0 - без таймаута)
        headers: Заголовки сессии, отправляются с каждым запросом
        logging: Конфигурация логирования (None - без структурных логов)

    Examples:
        >>> TransportConfig()
        >>> TransportConfig.create(timeout=10, headers={"User-Agent": "svc/1.0"})
    """
    timeout: Optional[TimeoutConfig] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    logging: Optional["LoggingConfig"] = None

    def __post_init__(self):
        """Заморозить заголовки."""
        if isinstance(self.headers, dict):
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def create(
        cls,
        timeout: Optional[TimeoutValue] = None,
        headers: Optional[Dict[str, str]] = None,
        logging: Optional["LoggingConfig"] = None,
    ) -> "TransportConfig":
        """
        Удобный конструктор конфигурации.

        Args:
            timeout: Таймаут (число, (connect, read), timedelta или TimeoutConfig)
            headers: Заголовки сессии
            logging: Конфигурация логирования

        Returns:
            TransportConfig instance
        """
        return cls(
            timeout=_as_timeout(timeout),
            headers=headers or {},
            logging=logging,
        )

    def with_timeout(self, timeout: Optional[TimeoutValue]) -> "TransportConfig":
        """Новый конфиг с другим таймаутом."""
        return replace(
            self,
            timeout=_as_timeout(timeout),
        )
