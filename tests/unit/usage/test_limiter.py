# tests/unit/usage/test_limiter.py — v1
"""Tests for usage/limiter.py — monthly counters, unlimited tiers, fail-open."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from careerai.cache.base_cache_store import BaseKeyValueStore, CacheUnavailable
from careerai.usage.limiter import DEFAULT_COUNTER_TTL, UsageLimiter, usage_key
from careerai.usage.limits import Feature


class TestUsageKey:
    def test_month_bucket(self, fixed_now):
        assert usage_key("u1", Feature.COVER_LETTER, fixed_now) == "usage:u1:cover-letter:2026-03"

    def test_converted_to_utc(self):
        from datetime import timedelta
        local = datetime(2026, 4, 1, 1, 0, tzinfo=timezone(timedelta(hours=3)))
        assert usage_key("u1", Feature.STUDY_PLAN, local).endswith(":2026-03")


class TestCheckAndIncrement:
    @pytest.mark.asyncio
    async def test_counts_up_to_limit_then_blocks(self, limiter):
        decisions = [
            await limiter.check_and_increment("u1", "mock-interview") for _ in range(3)
        ]
        assert [d.allowed for d in decisions] == [True, True, False]
        assert [d.current for d in decisions] == [1, 2, 3]
        assert [d.remaining for d in decisions] == [2, 1, 0]
        assert all(d.limit == 2 for d in decisions)

    @pytest.mark.asyncio
    async def test_first_increment_sets_expiry(self, limiter, kv_store):
        await limiter.check_and_increment("u1", Feature.RESUME_ANALYSIS)
        key = "usage:u1:resume-analysis:2026-03"
        assert kv_store.ttl(key) == pytest.approx(DEFAULT_COUNTER_TTL, abs=1)

    @pytest.mark.asyncio
    async def test_features_counted_separately(self, limiter):
        await limiter.check_and_increment("u1", "cover-letter")
        decision = await limiter.check_and_increment("u1", "study-plan")
        assert decision.current == 1

    @pytest.mark.asyncio
    async def test_new_month_starts_fresh(self, kv_store):
        now = [datetime(2026, 1, 31, 23, 59, tzinfo=timezone.utc)]
        limiter = UsageLimiter(kv_store, clock=lambda: now[0])
        for _ in range(3):
            await limiter.check_and_increment("u1", "mock-interview")
        now[0] = datetime(2026, 2, 1, 0, 1, tzinfo=timezone.utc)
        decision = await limiter.check_and_increment("u1", "mock-interview")
        assert decision.allowed is True
        assert decision.current == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tier", ["pro", "premium"])
    async def test_unlimited_tiers_skip_store(self, tier):
        store = AsyncMock(spec=BaseKeyValueStore)
        limiter = UsageLimiter(store)
        decision = await limiter.check_and_increment("u1", "resume-analysis", tier)
        assert decision.model_dump() == {"allowed": True, "remaining": -1, "limit": -1, "current": 0}
        assert store.mock_calls == []

    @pytest.mark.asyncio
    async def test_absent_store_fails_open(self):
        decision = await UsageLimiter(None).check_and_increment("u1", "cover-letter")
        assert decision.model_dump() == {"allowed": True, "remaining": 3, "limit": 3, "current": 0}

    @pytest.mark.asyncio
    async def test_unreachable_store_fails_open(self):
        store = AsyncMock(spec=BaseKeyValueStore)
        store.incr.side_effect = CacheUnavailable("incr", ConnectionError("down"))
        decision = await UsageLimiter(store).check_and_increment("u1", "cover-letter")
        assert decision.allowed is True
        assert decision.current == 0

    @pytest.mark.asyncio
    async def test_expiry_failure_after_increment_is_logged(self):
        store = AsyncMock(spec=BaseKeyValueStore)
        store.incr.return_value = 1
        store.expire.side_effect = CacheUnavailable("expire", ConnectionError("down"))
        with patch("careerai.usage.limiter.logger") as log:
            decision = await UsageLimiter(store).check_and_increment("u1", "cover-letter")

        assert decision.allowed is True
        store.incr.assert_awaited_once()
        store.expire.assert_awaited_once_with(store.incr.await_args.args[0], DEFAULT_COUNTER_TTL)
        message, key, current, _ = log.error.call_args.args
        assert "incremented" in message
        assert key == store.incr.await_args.args[0]
        assert current == 1

    @pytest.mark.asyncio
    async def test_unknown_feature_raises(self, limiter):
        with pytest.raises(ValueError):
            await limiter.check_and_increment("u1", "teleport")

    @pytest.mark.asyncio
    async def test_zero_limit_blocks_first_call(self, kv_store):
        from careerai.usage.limits import Tier, build_plan_limits
        limits = build_plan_limits()
        limits[Tier.FREE][Feature.STUDY_PLAN] = 0
        decision = await UsageLimiter(kv_store, limits).check_and_increment("u1", "study-plan")
        assert decision.allowed is False
        assert decision.remaining == 0


class TestReadOperations:
    @pytest.mark.asyncio
    async def test_get_current_usage_does_not_increment(self, limiter):
        await limiter.check_and_increment("u1", "cover-letter")
        stats = await limiter.get_current_usage("u1", "cover-letter")
        again = await limiter.get_current_usage("u1", "cover-letter")
        assert stats.current == again.current == 1
        assert stats.remaining == 2

    @pytest.mark.asyncio
    async def test_reset_usage(self, limiter):
        await limiter.check_and_increment("u1", "cover-letter")
        assert await limiter.reset_usage("u1", "cover-letter") is True
        assert (await limiter.get_current_usage("u1", "cover-letter")).current == 0

    @pytest.mark.asyncio
    async def test_reset_without_store(self):
        assert await UsageLimiter(None).reset_usage("u1", "cover-letter") is False

    @pytest.mark.asyncio
    async def test_all_usage_stats(self, limiter):
        await limiter.check_and_increment("u1", "resume-analysis")
        stats = await limiter.get_all_usage_stats("u1")
        assert set(stats) == {"resume-analysis", "cover-letter", "mock-interview", "study-plan"}
        assert stats["resume-analysis"].current == 1
        assert stats["resume-analysis"].remaining == 4
        assert stats["study-plan"].current == 0

    @pytest.mark.asyncio
    async def test_unlimited_stats(self, limiter):
        stats = await limiter.get_current_usage("u1", "cover-letter", "pro")
        assert stats.limit == -1
        assert stats.remaining == -1
