# src/fetch_builder/builder.py
"""
Fluent API для построения и выполнения запроса.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from .core.backoff import BackoffScheduler
from .core.config import HTTPMethod, ResponseType, merge_headers, normalize_field
from .core.config_store import ConfigStore
from .core.engine import RequestExecutor, RequestInterceptor, ResponseInterceptor
from .core.result import Result
from .transport import Transport

# Accept заголовок для режимов ответа
_ACCEPT_HEADERS = {
    ResponseType.JSON: "application/json",
    ResponseType.TEXT: "text/plain",
    ResponseType.BLOB: "application/octet-stream",
    ResponseType.ARRAY_BUFFER: "application/octet-stream",
}


class FetchBuilder:
    """
    Построитель запроса.

    Хранит только явно заданные поля: всё остальное берётся из глобальных
    настроек (ConfigStore) или встроенных значений по умолчанию.

    Example:
        >>> error, data = await (
        ...     FetchBuilder()
        ...     .set_url("https://api.example.com/users")
        ...     .set_method("GET")
        ...     .set_headers({"X-Trace": "1"})
        ...     .execute()
        ... )

        >>> # Или через статические конструкторы
        >>> result = await FetchBuilder.post("https://api.example.com/users", {"name": "alice"}).execute()
        >>> if result.ok:
        ...     print(result.value)

    Args:
        store: Хранилище глобальных настроек (по умолчанию общее на процесс)
        transport: Транспорт (по умолчанию HTTPXTransport на каждый execute)
        scheduler: Планировщик backoff ожидания
    """

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        transport: Optional[Transport] = None,
        scheduler: Optional[BackoffScheduler] = None,
    ):
        self._config: Dict[str, Any] = {}
        self._request_interceptors: List[RequestInterceptor] = []
        self._response_interceptors: List[ResponseInterceptor] = []
        self._executor = RequestExecutor(store=store, transport=transport, scheduler=scheduler)

    def _update_config(self, name: str, value: Any) -> "FetchBuilder":
        self._config[name] = normalize_field(name, value)
        return self

    # ==================== Сеттеры ====================

    def set_url(self, url: str) -> "FetchBuilder":
        """URL запроса."""
        return self._update_config("url", url)

    def set_method(self, method: Union[str, HTTPMethod]) -> "FetchBuilder":
        """HTTP метод (регистр не важен)."""
        return self._update_config("method", method)

    def set_headers(self, headers: Mapping[str, str]) -> "FetchBuilder":
        """Добавить заголовки к уже заданным локально."""
        return self._update_config(
            "headers", merge_headers(self._config.get("headers"), dict(headers))
        )

    def set_body(self, body: Any) -> "FetchBuilder":
        """
        Тело запроса.

        str уходит как текст, bytes - как есть, всё остальное
        (dict, list, pydantic модель, ...) сериализуется в JSON.
        """
        return self._update_config("body", body)

    def set_timeout(self, timeout_ms: int) -> "FetchBuilder":
        """Таймаут одной попытки в миллисекундах."""
        return self._update_config("timeout_ms", timeout_ms)

    def set_fetch_options(self, options: Mapping[str, Any]) -> "FetchBuilder":
        """Дополнительные параметры транспорта (например follow_redirects для httpx)."""
        return self._update_config("fetch_options", options)

    def set_max_retries(self, max_retries: int) -> "FetchBuilder":
        """Максимум повторов после первой попытки."""
        return self._update_config("max_retries", max_retries)

    def set_retry_delay(self, retry_delay_ms: int) -> "FetchBuilder":
        """Базовая задержка backoff в миллисекундах."""
        return self._update_config("retry_delay_ms", retry_delay_ms)

    def set_response_type(self, response_type: Union[str, ResponseType]) -> "FetchBuilder":
        """Режим разбора ответа без изменения заголовков."""
        return self._update_config("response_type", response_type)

    # ==================== Режимы ответа ====================

    def _response_mode(self, response_type: ResponseType) -> "FetchBuilder":
        self.set_response_type(response_type)
        return self.set_headers({"Accept": _ACCEPT_HEADERS[response_type]})

    def json(self) -> "FetchBuilder":
        """Разбирать ответ как JSON."""
        return self._response_mode(ResponseType.JSON)

    def text(self) -> "FetchBuilder":
        """Разбирать ответ как текст."""
        return self._response_mode(ResponseType.TEXT)

    def blob(self) -> "FetchBuilder":
        """Вернуть ответ как bytes."""
        return self._response_mode(ResponseType.BLOB)

    def array_buffer(self) -> "FetchBuilder":
        """Вернуть ответ как bytes."""
        return self._response_mode(ResponseType.ARRAY_BUFFER)

    # ==================== Интерсепторы ====================

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> "FetchBuilder":
        """
        Добавить request интерсептор.

        Получает RequestConfig, возвращает RequestConfig (или awaitable).
        Вызывается один раз на execute(), до первой попытки.
        """
        self._request_interceptors.append(interceptor)
        return self

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> "FetchBuilder":
        """
        Добавить response интерсептор.

        Получает декодированный ответ, возвращает новое значение (или awaitable).
        """
        self._response_interceptors.append(interceptor)
        return self

    # ==================== Выполнение ====================

    async def execute(self) -> Result:
        """
        Выполнить запрос с retry логикой.

        Returns:
            Success(value) или Failure(error); исключения не бросаются
        """
        return await self._executor.execute(
            dict(self._config),
            list(self._request_interceptors),
            list(self._response_interceptors),
        )

    # ==================== Удобные конструкторы ====================

    @classmethod
    def get(cls, url: str, **kwargs: Any) -> "FetchBuilder":
        """GET запрос."""
        return cls(**kwargs).set_url(url).set_method(HTTPMethod.GET)

    @classmethod
    def post(cls, url: str, body: Any = None, **kwargs: Any) -> "FetchBuilder":
        """POST запрос."""
        return cls(**kwargs).set_url(url).set_method(HTTPMethod.POST).set_body(body)

    @classmethod
    def put(cls, url: str, body: Any = None, **kwargs: Any) -> "FetchBuilder":
        """PUT запрос."""
        return cls(**kwargs).set_url(url).set_method(HTTPMethod.PUT).set_body(body)

    @classmethod
    def patch(cls, url: str, body: Any = None, **kwargs: Any) -> "FetchBuilder":
        """PATCH запрос."""
        return cls(**kwargs).set_url(url).set_method(HTTPMethod.PATCH).set_body(body)

    @classmethod
    def delete(cls, url: str, **kwargs: Any) -> "FetchBuilder":
        """DELETE запрос."""
        return cls(**kwargs).set_url(url).set_method(HTTPMethod.DELETE)

    @classmethod
    def head(cls, url: str, **kwargs: Any) -> "FetchBuilder":
        """HEAD запрос."""
        return cls(**kwargs).set_url(url).set_method(HTTPMethod.HEAD)

    @classmethod
    def options(cls, url: str, **kwargs: Any) -> "FetchBuilder":
        """OPTIONS запрос."""
        return cls(**kwargs).set_url(url).set_method(HTTPMethod.OPTIONS)
