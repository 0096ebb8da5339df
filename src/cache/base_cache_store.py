# src/cache/base_cache_store.py — v2
"""Abstract key-value store capability used by the cache and the usage limiter.

Backends must provide atomic ``incr`` and atomic expiring writes
(``setex``). The application layer never emulates either with a
read-modify-write sequence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CacheUnavailable(Exception):
    """The backing store could not be reached. Always recovered by callers."""

    def __init__(self, operation: str, cause: BaseException | None = None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cache store unavailable during {operation}{detail}")


class BaseKeyValueStore(ABC):
    """Unified interface for expiring key-value backends.

    All methods raise CacheUnavailable when the backend cannot be reached.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the raw value or None when absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value without expiry."""

    @abstractmethod
    async def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Atomically store a value with an expiry."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""

    @abstractmethod
    async def incr(self, key: str) -> int:
        """Atomically increment an integer counter and return the new value."""

    @abstractmethod
    async def expire(self, key: str, ttl_seconds: int) -> None:
        """Set an expiry on an existing key."""

    @abstractmethod
    async def mget(self, keys: list[str]) -> list[str | None]:
        """Fetch several keys in one round trip, preserving request order."""

    @abstractmethod
    async def dbsize(self) -> int:
        """Number of live keys."""

    async def close(self) -> None:
        """Release connections. Default: nothing to release."""
