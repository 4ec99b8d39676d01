# src/fetch_builder/core/error_handler.py

import asyncio
import builtins
from typing import Optional

import httpx

from .exceptions import (
    AbortError,
    ConfigurationError,
    FetchError,
    HTTPError,
    NetworkError,
    TimeoutError,
    UnknownError,
)

# До 3.11 asyncio.TimeoutError и встроенный TimeoutError - разные классы;
# встроенный (socket.timeout) - подкласс OSError, проверяется до сетевых ошибок
_TIMEOUT_ERRORS = (
    httpx.TimeoutException,
    asyncio.TimeoutError,
    builtins.TimeoutError,
)

# Сбои соединения на уровне httpx
_CONNECTIVITY_ERRORS = (
    httpx.NetworkError,
    httpx.ProxyError,
    httpx.RemoteProtocolError,
)


class ErrorHandler:
    """Класс для классификации ошибок запроса"""

    @staticmethod
    def classify(error: BaseException, url: Optional[str] = None) -> FetchError:
        """Преобразует сырую ошибку в одну из классифицированных"""

        # Уже классифицирована - повторная классификация не меняет вид.
        # ConfigurationError в Result не попадает, она уходит в UnknownError
        if isinstance(error, FetchError) and not isinstance(error, ConfigurationError):
            return error

        if isinstance(error, asyncio.CancelledError):
            return AbortError(cause=error)

        if isinstance(error, httpx.HTTPStatusError):
            response = error.response
            return HTTPError(response.status_code, response.reason_phrase, url, cause=error)

        status_code = getattr(error, "status_code", None)
        if isinstance(status_code, int):
            return HTTPError(status_code, getattr(error, "status_text", ""), url, cause=error)

        if isinstance(error, _TIMEOUT_ERRORS):
            return TimeoutError(str(error) or "The request timed out.", cause=error)

        if isinstance(error, _CONNECTIVITY_ERRORS) or isinstance(error, OSError):
            return NetworkError(str(error) or NetworkError().message, url, cause=error)

        if "network" in str(error).lower():
            return NetworkError(str(error), url, cause=error)

        return UnknownError(f"Unexpected error: {error!r}", cause=error)

    @staticmethod
    def is_retryable(error: FetchError) -> bool:
        """Проверяет, можно ли повторить запрос после этой ошибки"""

        # Повторяем только сетевые ошибки и 5xx
        if isinstance(error, NetworkError):
            return True

        if isinstance(error, HTTPError):
            return 500 <= error.status_code < 600

        return False
