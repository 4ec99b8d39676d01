"""
Exponential backoff между попытками.

Задержка не ограничена сверху и не содержит jitter:
delay = base_delay_ms * 2 ** attempt.
"""

import asyncio
from typing import Awaitable, Callable

Sleep = Callable[[float], Awaitable[None]]


def delay_for(attempt: int, base_delay_ms: int) -> int:
    """
    Задержка (мс) после неудачной попытки с индексом attempt.

    Examples:
        >>> delay_for(0, 1000)
        1000
        >>> delay_for(3, 10)
        80
    """
    if attempt < 0:
        raise ValueError("attempt must be non-negative")
    return base_delay_ms * (2 ** attempt)


class BackoffScheduler:
    """
    Ожидание между попытками.

    Args:
        sleep: Корутина ожидания в секундах (по умолчанию asyncio.sleep)

    Examples:
        >>> scheduler = BackoffScheduler()
        >>> await scheduler.wait(attempt=1, base_delay_ms=100)  # 200ms
    """

    def __init__(self, sleep: Sleep = asyncio.sleep):
        self._sleep = sleep

    async def wait(self, attempt: int, base_delay_ms: int) -> int:
        """
        Подождать delay_for(attempt, base_delay_ms) миллисекунд.

        Returns:
            Фактическая задержка в мс
        """
        delay_ms = delay_for(attempt, base_delay_ms)
        await self._sleep(delay_ms / 1000)
        return delay_ms
