"""Token-bucket limiter for calls to the inventory index."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable


class RateLimiter:
    """
    Async token bucket allowing ``max_per_second`` calls on average.

    The bucket holds at most ``max(1, max_per_second)`` tokens. ``acquire``
    sleeps until a token is available; there is no queue and callers are not
    ordered.
    """

    def __init__(
        self,
        max_per_second: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_per_second <= 0:
            raise ValueError("max_per_second must be positive")
        self.rate = float(max_per_second)
        self.capacity = max(1.0, self.rate)
        self._clock = clock
        self._sleep = sleep
        self._tokens = self.capacity
        self._updated_at = clock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._updated_at)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._updated_at = now

    def try_acquire(self) -> bool:
        self._refill()
        if self._tokens >= 1:
            self._tokens -= 1
            return True
        return False

    async def acquire(self) -> None:
        while not self.try_acquire():
            await self._sleep((1 - self._tokens) / self.rate)
