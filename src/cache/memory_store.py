# src/cache/memory_store.py — v1
"""In-process key-value store (CACHE_BACKEND=memory).

No external dependency. Expiry is evaluated lazily on access. Every
operation completes without yielding to the event loop, so incr and setex
are atomic within one process. Not shared between workers.
"""

from __future__ import annotations

import time
from typing import Callable

from careerai.cache.base_cache_store import BaseKeyValueStore


class InMemoryKeyValueStore(BaseKeyValueStore):
    """Dictionary-backed store for development and tests."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: dict[str, str] = {}
        self._expires_at: dict[str, float] = {}

    def _alive(self, key: str) -> bool:
        deadline = self._expires_at.get(key)
        if deadline is not None and self._clock() >= deadline:
            self._data.pop(key, None)
            self._expires_at.pop(key, None)
        return key in self._data

    async def get(self, key: str) -> str | None:
        if not self._alive(key):
            return None
        return self._data[key]

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._expires_at.pop(key, None)

    async def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        self._data[key] = value
        self._expires_at[key] = self._clock() + ttl_seconds

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
        self._expires_at.pop(key, None)

    async def incr(self, key: str) -> int:
        current = int(self._data[key]) if self._alive(key) else 0
        current += 1
        # INCR keeps an existing expiry
        self._data[key] = str(current)
        return current

    async def expire(self, key: str, ttl_seconds: int) -> None:
        if self._alive(key):
            self._expires_at[key] = self._clock() + ttl_seconds

    async def mget(self, keys: list[str]) -> list[str | None]:
        return [self._data[k] if self._alive(k) else None for k in keys]

    async def dbsize(self) -> int:
        return sum(1 for k in list(self._data) if self._alive(k))

    def ttl(self, key: str) -> float | None:
        """Seconds until expiry, or None for keys without one (test helper)."""
        if not self._alive(key) or key not in self._expires_at:
            return None
        return self._expires_at[key] - self._clock()
