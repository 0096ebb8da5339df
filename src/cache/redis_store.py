# src/cache/redis_store.py — v2
"""Redis-backed key-value store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for distributed/multi-instance deployments. Relies on Redis for
atomic INCR and SETEX.
"""

from __future__ import annotations

import logging
from typing import Any

from careerai.cache.base_cache_store import BaseKeyValueStore, CacheUnavailable

logger = logging.getLogger(__name__)


class RedisKeyValueStore(BaseKeyValueStore):
    """Async Redis store; connection errors surface as CacheUnavailable."""

    def __init__(self, redis_url: str, socket_timeout: float = 2.0) -> None:
        try:
            import redis.asyncio as aioredis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client: Any = aioredis.Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )

    @classmethod
    def from_client(cls, client: Any) -> RedisKeyValueStore:
        """Wrap an existing redis.asyncio client."""
        store = cls.__new__(cls)
        store._client = client
        return store

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except Exception as e:
            raise CacheUnavailable("get", e) from e

    async def set(self, key: str, value: str) -> None:
        try:
            await self._client.set(key, value)
        except Exception as e:
            raise CacheUnavailable("set", e) from e

    async def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        try:
            await self._client.setex(key, ttl_seconds, value)
        except Exception as e:
            raise CacheUnavailable("setex", e) from e

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except Exception as e:
            raise CacheUnavailable("delete", e) from e

    async def incr(self, key: str) -> int:
        try:
            return int(await self._client.incr(key))
        except Exception as e:
            raise CacheUnavailable("incr", e) from e

    async def expire(self, key: str, ttl_seconds: int) -> None:
        try:
            await self._client.expire(key, ttl_seconds)
        except Exception as e:
            raise CacheUnavailable("expire", e) from e

    async def mget(self, keys: list[str]) -> list[str | None]:
        """Pipelined multi-get: one round trip, results in request order."""
        if not keys:
            return []
        try:
            pipe = self._client.pipeline(transaction=False)
            for key in keys:
                pipe.get(key)
            return list(await pipe.execute())
        except Exception as e:
            raise CacheUnavailable("mget", e) from e

    async def dbsize(self) -> int:
        try:
            return int(await self._client.dbsize())
        except Exception as e:
            raise CacheUnavailable("dbsize", e) from e

    async def close(self) -> None:
        """Close the Redis connection pool."""
        try:
            await self._client.aclose()
        except Exception as e:
            logger.warning("Failed to close Redis client: %s", e)
