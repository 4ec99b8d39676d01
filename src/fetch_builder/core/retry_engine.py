"""
Retry engine для повторных попыток.

Хранит счётчик попыток одного execute() и решает, нужен ли повтор:
- потолок - max_retries
- ретраим только то, что ErrorHandler считает retryable
"""

import logging
from typing import Optional

from .backoff import BackoffScheduler, delay_for
from .error_handler import ErrorHandler
from .exceptions import FetchError

logger = logging.getLogger(__name__)


class RetryEngine:
    """
    Механизм retry.

    Экземпляр создаётся на каждый execute(), между вызовами не разделяется.

    Examples:
        >>> engine = RetryEngine(max_retries=3, retry_delay_ms=1000)
        >>> if engine.should_retry(error):
        >>>     await engine.wait()
        >>>     engine.increment()
    """

    def __init__(
        self,
        max_retries: int,
        retry_delay_ms: int,
        scheduler: Optional[BackoffScheduler] = None,
    ):
        """
        Args:
            max_retries: Максимум повторов (без учёта первой попытки)
            retry_delay_ms: Базовая задержка backoff (мс)
            scheduler: Планировщик ожидания
        """
        self.max_retries = max_retries
        self.retry_delay_ms = retry_delay_ms
        self._scheduler = scheduler or BackoffScheduler()
        self._attempt = 0

    def has_attempts_left(self) -> bool:
        """Условие цикла: attempt <= max_retries."""
        return self._attempt <= self.max_retries

    def should_retry(self, error: FetchError) -> bool:
        """
        Решить нужен ли retry.

        Args:
            error: Классифицированная ошибка

        Returns:
            True если нужен retry
        """
        # Проверка лимита попыток
        if self._attempt >= self.max_retries:
            return False

        return ErrorHandler.is_retryable(error)

    def get_wait_time(self) -> int:
        """Задержка (мс) перед следующей попыткой."""
        return delay_for(self._attempt, self.retry_delay_ms)

    async def wait(self) -> int:
        """
        Асинхронное ожидание перед retry.

        Returns:
            Задержка в мс
        """
        delay_ms = await self._scheduler.wait(self._attempt, self.retry_delay_ms)
        logger.debug(
            "Backoff finished",
            extra={"attempt": self._attempt, "delay_ms": delay_ms},
        )
        return delay_ms

    def increment(self):
        """Увеличить счётчик попыток."""
        self._attempt += 1

    @property
    def attempt(self) -> int:
        """Текущая попытка (с нуля)."""
        return self._attempt
