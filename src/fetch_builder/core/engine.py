"""
Движок выполнения запроса.

Последовательность одного execute():
1. Слияние локальной конфигурации с глобальной (merge_config)
2. Request интерсепторы - один раз, по порядку регистрации
3. Цикл попыток: транспорт → 2xx? декодирование : классификация → retry/стоп
4. Response интерсепторы - один раз, после успешного декодирования

Наружу ничего не бросается: любой сбой превращается в Failure.
"""

import asyncio
import inspect
import logging
import uuid
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Union

from ..transport import HTTPXTransport, Transport, TransportRequest, TransportResponse
from ..utils.sanitizer import mask_headers
from .backoff import BackoffScheduler
from .config import RequestConfig, merge_config
from .config_store import ConfigStore, get_config_store
from .decoder import ResponseDecoder
from .error_handler import ErrorHandler
from .exceptions import AbortError, HTTPError, UnknownError
from .logging.filters import reset_request_id, set_request_id
from .result import Failure, Result, Success
from .retry_engine import RetryEngine

logger = logging.getLogger(__name__)

RequestInterceptor = Callable[[RequestConfig], Union[RequestConfig, Awaitable[RequestConfig]]]
ResponseInterceptor = Callable[[Any], Any]


async def _call(interceptor: Callable[[Any], Any], value: Any) -> Any:
    """Вызвать sync или async интерсептор."""
    result = interceptor(value)
    if inspect.isawaitable(result):
        result = await result
    return result


class RequestExecutor:
    """
    Выполняет запрос с retry логикой.

    Example:
        >>> executor = RequestExecutor(transport=HTTPXTransport())
        >>> result = await executor.execute({"url": "https://api.example.com/users"})
        >>> if result.ok:
        ...     print(result.value)

    Args:
        store: Хранилище глобальных настроек (по умолчанию общее на процесс)
        transport: Транспорт; если не задан, на каждый execute() создаётся
            и закрывается свой HTTPXTransport
        scheduler: Планировщик backoff ожидания
    """

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        transport: Optional[Transport] = None,
        scheduler: Optional[BackoffScheduler] = None,
    ):
        self._store = store
        self._transport = transport
        self._scheduler = scheduler or BackoffScheduler()

    @property
    def store(self) -> ConfigStore:
        return self._store or get_config_store()

    async def execute(
        self,
        local: Mapping[str, Any],
        request_interceptors: Sequence[RequestInterceptor] = (),
        response_interceptors: Sequence[ResponseInterceptor] = (),
    ) -> Result:
        """
        Выполнить запрос.

        Args:
            local: Явно заданные поля билдера
            request_interceptors: Преобразования конфигурации
            response_interceptors: Преобразования декодированного ответа

        Returns:
            Success или Failure
        """
        token = set_request_id(uuid.uuid4().hex)
        try:
            try:
                config = merge_config(self.store.get_defaults(), local)
                for interceptor in request_interceptors:
                    config = await _call(interceptor, config)
                    if not isinstance(config, RequestConfig):
                        raise TypeError(
                            f"Request interceptor {interceptor!r} returned "
                            f"{type(config).__name__}, expected RequestConfig"
                        )
                request = self._build_request(config)
            except (Exception, asyncio.CancelledError) as e:
                error = ErrorHandler.classify(e)
                logger.error("Request preparation failed", extra={"error": repr(error)})
                return Failure(error, attempts=0)

            logger.debug(
                "Request prepared",
                extra={
                    "method": config.method.value,
                    "url": config.url,
                    "headers": mask_headers(config.headers),
                    "max_retries": config.max_retries,
                },
            )

            if self._transport is not None:
                return await self._run(config, request, self._transport, response_interceptors)

            async with HTTPXTransport() as transport:
                return await self._run(config, request, transport, response_interceptors)
        finally:
            reset_request_id(token)

    async def _run(
        self,
        config: RequestConfig,
        request: TransportRequest,
        transport: Transport,
        response_interceptors: Sequence[ResponseInterceptor],
    ) -> Result:
        """Цикл попыток."""
        retry_engine = RetryEngine(config.max_retries, config.retry_delay_ms, self._scheduler)

        try:
            while retry_engine.has_attempts_left():
                attempts = retry_engine.attempt + 1
                logger.debug(
                    "Attempt started",
                    extra={"attempt": retry_engine.attempt, "method": request.method, "url": request.url},
                )

                try:
                    response = await self._perform(transport, request, config.timeout_ms)
                    if not response.ok:
                        raise HTTPError(response.status_code, response.reason_phrase, config.url)
                except (Exception, asyncio.CancelledError) as e:
                    error = ErrorHandler.classify(e, config.url)

                    if not retry_engine.should_retry(error):
                        logger.warning(
                            "Request failed",
                            extra={"url": config.url, "attempts": attempts, "error": repr(error)},
                        )
                        return Failure(error, attempts=attempts)

                    logger.info(
                        "Retrying request",
                        extra={
                            "url": config.url,
                            "attempt": retry_engine.attempt,
                            "delay_ms": retry_engine.get_wait_time(),
                            "error": repr(error),
                        },
                    )
                    await retry_engine.wait()
                    retry_engine.increment()
                    continue

                # Ошибки декодирования и интерсепторов не ретраим
                try:
                    value = ResponseDecoder.decode(response.content, config.response_type)
                    for interceptor in response_interceptors:
                        value = await _call(interceptor, value)
                except (Exception, asyncio.CancelledError) as e:
                    error = ErrorHandler.classify(e, config.url)
                    logger.warning(
                        "Response processing failed",
                        extra={"url": config.url, "attempts": attempts, "error": repr(error)},
                    )
                    return Failure(error, attempts=attempts)

                logger.debug(
                    "Request succeeded",
                    extra={"url": config.url, "status_code": response.status_code, "attempts": attempts},
                )
                return Success(value, attempts=attempts)

        except (Exception, asyncio.CancelledError) as e:
            # Например, отмена во время backoff ожидания
            return Failure(ErrorHandler.classify(e, config.url), attempts=retry_engine.attempt + 1)

        return Failure(
            UnknownError("Unknown error occurred during the fetch operation."),
            attempts=retry_engine.attempt,
        )

    @staticmethod
    def _build_request(config: RequestConfig) -> TransportRequest:
        """Параметры попытки из эффективной конфигурации; тело сериализуется один раз."""
        return TransportRequest(
            url=config.url,
            method=config.method.value,
            headers=dict(config.headers),
            content=config.body.encode() if config.body is not None else None,
            options=dict(config.fetch_options),
        )

    @staticmethod
    async def _perform(
        transport: Transport,
        request: TransportRequest,
        timeout_ms: Optional[int],
    ) -> TransportResponse:
        """
        Одна попытка; при timeout_ms отменяется по истечении срока.

        AbortError только если истёк сам срок: ошибки транспорта
        (в том числе его собственные таймауты) пробрасываются как есть.
        """
        if timeout_ms is None:
            return await transport.perform(request)

        task = asyncio.ensure_future(transport.perform(request))
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task in done:
            return task.result()

        task.cancel()
        # Дождаться завершения отменённой попытки
        await asyncio.wait({task})
        raise AbortError(timeout_ms=timeout_ms)

