"""
Иерархия исключений fetch-builder.

Классификация (закрытый набор):
- NetworkError - сетевой сбой, ретраим всегда
- HTTPError - не-2xx ответ, ретраим только 5xx
- TimeoutError, AbortError, DecodeError, UnknownError - НЕ ретраим

ConfigurationError стоит особняком: бросается сеттерами билдера и
хранилищем настроек, в Result движка никогда не попадает.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Вид классифицированной ошибки."""
    NETWORK = "network"
    HTTP = "http"
    TIMEOUT = "timeout"
    ABORT = "abort"
    DECODE = "decode"
    UNKNOWN = "unknown"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class FetchError(Exception):
    """Базовое исключение fetch-builder."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    retryable: bool = False

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# КЛАССИФИЦИРОВАННЫЕ ОШИБКИ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class NetworkError(FetchError):
    """
    Сетевая ошибка.

    Примеры:
    - Connection refused
    - DNS failure
    - Connection reset
    """

    kind = ErrorKind.NETWORK
    retryable = True

    def __init__(
        self,
        message: str = "A network error occurred. Please check your connection.",
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message, cause)


class HTTPError(FetchError):
    """
    Сервер ответил не-2xx статусом.

    Args:
        status_code: HTTP статус
        status_text: Reason phrase из ответа
        url: URL
    """

    kind = ErrorKind.HTTP

    def __init__(
        self,
        status_code: int,
        status_text: str = "",
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.url = url

        msg = f"HTTP error: {status_code}"
        if status_text:
            msg += f" {status_text}"
        if url:
            msg += f" for {url}"

        super().__init__(msg, cause)

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        # 4xx ошибки клиента повтором не исправить
        return 500 <= self.status_code < 600


class TimeoutError(FetchError):
    """Транспорт сообщил о таймауте до получения ответа."""

    kind = ErrorKind.TIMEOUT

    def __init__(
        self,
        message: str = "The request timed out.",
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause)


class AbortError(FetchError):
    """
    Попытка была отменена.

    Отмену вызывает либо сработавший таймаут попытки (timeout_ms задан),
    либо отмена со стороны вызывающего кода.
    """

    kind = ErrorKind.ABORT

    def __init__(
        self,
        message: str = "The request was aborted.",
        timeout_ms: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        self.timeout_ms = timeout_ms
        if timeout_ms is not None:
            message += f" (timeout: {timeout_ms}ms)"
        super().__init__(message, cause)


class DecodeError(FetchError):
    """
    Тело успешного ответа не разбирается в заявленном режиме.

    Примеры:
    - Битый JSON
    - Невалидный UTF-8 в text режиме
    """

    kind = ErrorKind.DECODE

    def __init__(
        self,
        message: str,
        response_type: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.response_type = response_type
        super().__init__(message, cause)


class UnknownError(FetchError):
    """Любая ошибка, не подпадающая под остальные виды."""

    kind = ErrorKind.UNKNOWN


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# КОНФИГУРАЦИЯ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConfigurationError(FetchError, ValueError):
    """Невалидное значение конфигурации."""
