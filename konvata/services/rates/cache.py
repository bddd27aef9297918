# konvata/services/rates/cache.py
"""
Short-lived response cache for provider calls.

Live rates change at most every minute on the provider side, so identical
requests within a short window (30 seconds by default) reuse the previous
successful envelope instead of spending plan quota.

Only successful envelopes are stored; errors are never cached.
"""

import copy
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

CacheKey = tuple[str, tuple[tuple[str, str], ...]]


@dataclass
class CacheStats:
    """Counters for the health endpoint."""
    hits: int = 0
    misses: int = 0
    entries: int = 0


class ResponseCache:
    """
    Thread-safe bounded LRU cache with TTL for provider envelopes.

    Sync endpoints run in a threadpool, so all access goes through a lock.
    When full, the least recently used entry is evicted.

    Values are deep-copied on the way in and out so callers can never
    mutate a cached envelope.
    """

    def __init__(
            self,
            ttl_seconds: float = 30,
            max_entries: int = 256,
            clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds cannot be negative")
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[CacheKey, tuple[float, dict]] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def enabled(self) -> bool:
        return self._ttl > 0

    @staticmethod
    def make_key(path: str, params: Mapping[str, str]) -> CacheKey:
        """Key on path plus sorted query params (the credential is never part of params)."""
        return path, tuple(sorted(params.items()))

    def get(self, key: CacheKey) -> dict | None:
        """Return a copy of the cached envelope, or None if absent or expired."""
        if not self.enabled:
            return None

        with self._lock:
            cached = self._entries.get(key)
            if cached is None:
                self._misses += 1
                return None

            stored_at, value = cached
            if self._clock() - stored_at >= self._ttl:
                del self._entries[key]
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return copy.deepcopy(value)

    def set(self, key: CacheKey, value: dict[str, Any]) -> None:
        """Store an envelope, evicting the least recently used entry when full."""
        if not self.enabled:
            return

        with self._lock:
            if key in self._entries:
                del self._entries[key]

            while len(self._entries) >= self._max_entries:
                evicted = next(iter(self._entries))
                del self._entries[evicted]
                logger.debug(f"Evicted cached response for {evicted[0]}")

            self._entries[key] = (self._clock(), copy.deepcopy(value))

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.debug(f"Cleared {count} cached responses")

    @property
    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, entries=len(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
