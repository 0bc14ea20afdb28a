"""In-process TTL cache for inventory query results."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Generic, Optional, TypeVar

from cachetools import TTLCache

from observability.metrics import cache_hits_total, cache_misses_total

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryCache(Generic[T]):
    """
    Time-bounded cache keyed by a canonical criteria string.

    Stored values must be immutable. Entries expire ``ttl_seconds`` after they
    were written; once ``max_entries`` is reached the least recently used
    entry is dropped to make room.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
        name: str = "inventory",
        max_entries: int = 1000,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._name = name
        self._entries: TTLCache = TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=clock)
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[T]:
        value = self._entries.get(key)
        if value is not None:
            self.hits += 1
            cache_hits_total.labels(cache_type=self._name).inc()
            return value

        self.misses += 1
        cache_misses_total.labels(cache_type=self._name).inc()
        return None

    def set(self, key: str, value: T) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)

    def stats(self) -> Dict[str, int]:
        return {"entries": len(self), "hits": self.hits, "misses": self.misses}
