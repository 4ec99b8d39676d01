# src/fetch_builder/transport.py
"""
Транспорт: выполнение одной HTTP попытки.

Движок работает с любым объектом, реализующим протокол Transport.
HTTPXTransport - реализация по умолчанию на базе httpx.AsyncClient.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx


@dataclass(frozen=True)
class TransportRequest:
    """
    Параметры одной попытки.

    Args:
        url: URL запроса
        method: HTTP метод
        headers: Заголовки
        content: Сериализованное тело или None
        options: Дополнительные параметры транспорта (fetch_options)
    """
    url: str
    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TransportResponse:
    """Ответ транспорта: статус, заголовки и тело целиком."""
    status_code: int
    reason_phrase: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def ok(self) -> bool:
        """2xx статус."""
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Capability "выполнить HTTP запрос"."""

    async def perform(self, request: TransportRequest) -> TransportResponse:
        ...


class HTTPXTransport:
    """
    Транспорт на базе httpx.AsyncClient.

    Example:
        >>> async with HTTPXTransport() as transport:
        ...     response = await transport.perform(
        ...         TransportRequest(url="https://api.example.com/users", method="GET")
        ...     )
        ...     print(response.status_code)

    Исключения httpx не перехватываются: их классифицирует движок.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        **client_kwargs: Any,
    ):
        """
        Args:
            client: Готовый httpx.AsyncClient (закрывать его будет владелец)
            **client_kwargs: Параметры для создания собственного клиента
        """
        self._client = client
        self._owns_client = client is None
        self._client_kwargs: Dict[str, Any] = client_kwargs

    async def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            self._client = httpx.AsyncClient(**self._client_kwargs)
        return self._client

    async def __aenter__(self) -> "HTTPXTransport":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Закрыть клиент и освободить ресурсы."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def perform(self, request: TransportRequest) -> TransportResponse:
        """
        Выполнить одну попытку.

        Args:
            request: Параметры попытки

        Returns:
            TransportResponse с прочитанным телом

        Raises:
            httpx.TransportError: Сетевые ошибки и таймауты httpx
        """
        client = await self._get_client()
        response = await client.request(
            request.method,
            request.url,
            headers=dict(request.headers),
            content=request.content,
            **dict(request.options),
        )
        return TransportResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            headers=dict(response.headers),
            content=response.content,
        )
