# tests/unit/cache/test_memory_store.py — v1
"""Tests for cache/memory_store.py — lazy expiry and atomic counters."""

from __future__ import annotations

import pytest

from careerai.cache.memory_store import InMemoryKeyValueStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore(clock=clock)


class TestInMemoryKeyValueStore:
    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get("nope") is None

    @pytest.mark.asyncio
    async def test_setex_expires(self, store, clock):
        await store.setex("k", 10, "v")
        assert await store.get("k") == "v"
        clock.now += 10
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_set_clears_expiry(self, store, clock):
        await store.setex("k", 10, "v1")
        await store.set("k", "v2")
        clock.now += 100
        assert await store.get("k") == "v2"

    @pytest.mark.asyncio
    async def test_incr_from_zero(self, store):
        assert await store.incr("c") == 1
        assert await store.incr("c") == 2

    @pytest.mark.asyncio
    async def test_incr_keeps_expiry(self, store, clock):
        await store.incr("c")
        await store.expire("c", 5)
        await store.incr("c")
        assert store.ttl("c") == pytest.approx(5)
        clock.now += 5
        assert await store.incr("c") == 1

    @pytest.mark.asyncio
    async def test_expire_missing_key_is_noop(self, store):
        await store.expire("ghost", 5)
        assert store.ttl("ghost") is None

    @pytest.mark.asyncio
    async def test_mget_preserves_order(self, store):
        await store.set("a", "1")
        await store.set("c", "3")
        assert await store.mget(["c", "b", "a"]) == ["3", None, "1"]

    @pytest.mark.asyncio
    async def test_delete_and_dbsize(self, store, clock):
        await store.set("a", "1")
        await store.setex("b", 1, "2")
        assert await store.dbsize() == 2
        clock.now += 1
        assert await store.dbsize() == 1
        await store.delete("a")
        await store.delete("missing")
        assert await store.dbsize() == 0
