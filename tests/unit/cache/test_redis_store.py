# tests/unit/cache/test_redis_store.py — v2
"""Tests for cache/redis_store.py — mocked redis.asyncio client."""

from __future__ import annotations

import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

from careerai.cache.base_cache_store import CacheUnavailable
from careerai.cache.redis_store import RedisKeyValueStore


def _store(client: MagicMock) -> RedisKeyValueStore:
    return RedisKeyValueStore.from_client(client)


class TestRedisKeyValueStore:
    def test_import_error_without_redis(self):
        """Clear ImportError when redis is not available."""
        saved = {k: sys.modules.get(k) for k in ("redis", "redis.asyncio")}
        sys.modules["redis"] = None  # type: ignore[assignment]
        sys.modules["redis.asyncio"] = None  # type: ignore[assignment]
        try:
            with pytest.raises(ImportError, match="redis"):
                RedisKeyValueStore(redis_url="redis://localhost")
        finally:
            for name, mod in saved.items():
                if mod is not None:
                    sys.modules[name] = mod
                else:
                    sys.modules.pop(name, None)

    @pytest.mark.asyncio
    async def test_get_and_setex(self):
        client = MagicMock()
        client.get = AsyncMock(return_value="v")
        client.setex = AsyncMock()
        store = _store(client)

        assert await store.get("k") == "v"
        await store.setex("k", 60, "v")
        client.setex.assert_awaited_once_with("k", 60, "v")

    @pytest.mark.asyncio
    async def test_incr_returns_int(self):
        client = MagicMock()
        client.incr = AsyncMock(return_value=3)
        assert await _store(client).incr("c") == 3

    @pytest.mark.asyncio
    async def test_errors_become_cache_unavailable(self):
        client = MagicMock()
        client.get = AsyncMock(side_effect=ConnectionError("refused"))
        client.incr = AsyncMock(side_effect=TimeoutError("slow"))
        store = _store(client)

        with pytest.raises(CacheUnavailable) as exc_info:
            await store.get("k")
        assert exc_info.value.operation == "get"
        assert isinstance(exc_info.value.cause, ConnectionError)

        with pytest.raises(CacheUnavailable, match="incr"):
            await store.incr("c")

    @pytest.mark.asyncio
    async def test_mget_single_pipeline(self):
        pipe = MagicMock()
        pipe.execute = AsyncMock(return_value=["1", None, "3"])
        client = MagicMock()
        client.pipeline = MagicMock(return_value=pipe)

        result = await _store(client).mget(["a", "b", "c"])

        assert result == ["1", None, "3"]
        client.pipeline.assert_called_once_with(transaction=False)
        assert [c.args[0] for c in pipe.get.call_args_list] == ["a", "b", "c"]
        pipe.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_mget_empty_skips_round_trip(self):
        client = MagicMock()
        assert await _store(client).mget([]) == []
        client.pipeline.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_swallows_errors(self):
        client = MagicMock()
        client.aclose = AsyncMock(side_effect=RuntimeError("already closed"))
        await _store(client).close()
