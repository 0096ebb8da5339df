# src/cache/cache_factory.py — v3
"""Factory for key-value store instantiation.

A missing cache is a normal state: callers receive None and every cache
consumer treats None as "not cached / allow".
"""

from __future__ import annotations

import logging

from careerai.cache.base_cache_store import BaseKeyValueStore
from careerai.config.settings import Settings

logger = logging.getLogger(__name__)


def create_kv_store(settings: Settings | None = None) -> BaseKeyValueStore | None:
    """Instantiate the configured key-value backend.

    Args:
        settings: Application settings. None builds an in-memory store.

    Returns:
        Configured backend, or None when caching is disabled or the Redis
        URL is missing.
    """
    if settings is None:
        from careerai.cache.memory_store import InMemoryKeyValueStore
        return InMemoryKeyValueStore()

    if not settings.cache_enabled or settings.cache_backend == "none":
        logger.info("Cache disabled by configuration")
        return None

    if settings.cache_backend == "memory":
        from careerai.cache.memory_store import InMemoryKeyValueStore
        return InMemoryKeyValueStore()

    if settings.cache_backend == "redis":
        if not settings.cache_redis_url:
            logger.warning("CACHE_REDIS_URL not set, caching disabled")
            return None
        from careerai.cache.redis_store import RedisKeyValueStore
        return RedisKeyValueStore(redis_url=settings.cache_redis_url)

    raise ValueError(f"Unsupported cache backend: {settings.cache_backend!r}")
