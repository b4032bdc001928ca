"""Async in-memory TTL cache.

Used to memoise FairWork API responses. Entries expire on a monotonic clock;
when ``max_size`` is reached expired entries are dropped first, then the oldest
live entry.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple


class AsyncTTLCache:
    """Dict-based cache with per-key TTL expiry.

    Attributes:
        default_ttl: Time-to-live in seconds used when ``set`` gets no ttl
        max_size: Maximum number of entries to keep (0 = unlimited)
    """

    def __init__(self, default_ttl: float = 300.0, max_size: int = 0) -> None:
        self._store: Dict[str, Tuple[Any, float]] = {}
        self._lock = asyncio.Lock()
        self.default_ttl = default_ttl
        self.max_size = max_size
        self.hits = 0
        self.misses = 0

    async def get(self, key: str) -> Optional[Any]:
        """Get a value from the cache, or None if missing or expired."""
        async with self._lock:
            return self._get_unlocked(key)

    async def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value in the cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds, defaults to ``default_ttl``
        """
        async with self._lock:
            self._set_unlocked(key, value, ttl)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._store.pop(key, None)

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()

    async def evict_expired(self) -> int:
        """Remove all expired entries. Returns count of evicted keys."""
        async with self._lock:
            return self._evict_expired_unlocked()

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl: Optional[float] = None,
        cache_if: Optional[Callable[[Any], bool]] = None,
    ) -> Any:
        """Return the cached value for ``key`` or compute, store and return it.

        The factory runs outside the lock, so concurrent misses on the same key
        may both call it; the last writer wins.

        Args:
            key: Cache key
            factory: Coroutine function producing the value on a miss
            ttl: Time-to-live in seconds, defaults to ``default_ttl``
            cache_if: Predicate deciding whether a computed value is stored
        """
        async with self._lock:
            cached = self._get_unlocked(key)
        if cached is not None:
            return cached

        value = await factory()
        if cache_if is None or cache_if(value):
            async with self._lock:
                self._set_unlocked(key, value, ttl)
        return value

    def size(self) -> int:
        """Get the current number of stored entries, expired ones included."""
        return len(self._store)

    def _get_unlocked(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            self.misses += 1
            return None
        value, expires_at = entry
        if time.monotonic() > expires_at:
            del self._store[key]
            self.misses += 1
            return None
        self.hits += 1
        return value

    def _set_unlocked(self, key: str, value: Any, ttl: Optional[float]) -> None:
        if key not in self._store and self.max_size > 0 and len(self._store) >= self.max_size:
            if not self._evict_expired_unlocked():
                # Simple FIFO: dicts keep insertion order
                del self._store[next(iter(self._store))]
        expires_at = time.monotonic() + (ttl if ttl is not None else self.default_ttl)
        self._store[key] = (value, expires_at)

    def _evict_expired_unlocked(self) -> int:
        now = time.monotonic()
        expired = [k for k, (_, exp) in self._store.items() if now > exp]
        for k in expired:
            del self._store[k]
        return len(expired)
