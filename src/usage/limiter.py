# src/usage/limiter.py — v1
"""Monthly per-user feature quotas over an atomic counter store.

Counters live under ``usage:{user_id}:{feature}:{YYYY-MM}`` (UTC month), so
a new month starts from zero without any reset job. The first increment of
a month sets a 32-day expiry so stale counters clean themselves up.

The limiter fails open: with no store, or when the store is unreachable,
the call is allowed and nothing is counted. Quotas can therefore be
overrun during a backend outage.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable

from careerai.cache.base_cache_store import BaseKeyValueStore, CacheUnavailable
from careerai.usage.limits import (
    FEATURE_NAMES,
    UNLIMITED,
    Feature,
    PlanLimits,
    Tier,
    build_plan_limits,
    get_remaining_usage,
    is_unlimited,
    parse_feature,
    parse_tier,
)
from careerai.usage.models import UsageDecision, UsageStats

logger = logging.getLogger(__name__)

DEFAULT_COUNTER_TTL = 32 * 24 * 60 * 60


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def usage_key(user_id: str, feature: Feature, now: datetime) -> str:
    """Counter key for one user, feature and UTC calendar month."""
    month = now.astimezone(timezone.utc).strftime("%Y-%m")
    return f"usage:{user_id}:{feature.value}:{month}"


class UsageLimiter:
    """Counts metered calls and decides whether they are allowed."""

    def __init__(
        self,
        store: BaseKeyValueStore | None,
        limits: PlanLimits | None = None,
        clock: Callable[[], datetime] = _utc_now,
        counter_ttl: int = DEFAULT_COUNTER_TTL,
    ) -> None:
        self._store = store
        self._limits = limits or build_plan_limits()
        self._clock = clock
        self._counter_ttl = counter_ttl

    def limit_for(self, feature: str | Feature, tier: str | Tier = Tier.FREE) -> int:
        plan = self._limits.get(parse_tier(tier), self._limits[Tier.FREE])
        return plan[parse_feature(feature)]

    async def check_and_increment(
        self,
        user_id: str,
        feature: str | Feature,
        tier: str | Tier = Tier.FREE,
    ) -> UsageDecision:
        """Count one use of ``feature`` and decide whether it is allowed.

        Unlimited tiers never touch the store.

        Raises:
            ValueError: If ``feature`` is not metered.
        """
        feature = parse_feature(feature)
        limit = self.limit_for(feature, tier)

        if is_unlimited(limit):
            return UsageDecision(allowed=True, remaining=UNLIMITED, limit=UNLIMITED, current=0)

        if self._store is None:
            logger.warning("Usage store unavailable, allowing %s without tracking", feature.value)
            return self._fail_open(limit)

        key = usage_key(user_id, feature, self._clock())
        try:
            current = await self._store.incr(key)
        except CacheUnavailable as e:
            logger.warning("Usage tracking failed for %s, allowing: %s", key, e)
            return self._fail_open(limit)

        if current == 1:
            try:
                await self._store.expire(key, self._counter_ttl)
            except CacheUnavailable as e:
                logger.error(
                    "Counter %s was incremented to %d but its expiry could not be set, allowing: %s",
                    key, current, e,
                )
                return self._fail_open(limit)

        allowed = current <= limit
        decision = UsageDecision(
            allowed=allowed,
            remaining=max(0, limit - current + 1),
            limit=limit,
            current=current,
        )
        logger.info(
            "Usage check %s/%s: %d/%d (%s)",
            user_id, feature.value, current, limit, "allowed" if allowed else "blocked",
        )
        if not allowed:
            logger.info("%s limit reached for %s this month", FEATURE_NAMES[feature], user_id)
        return decision

    async def get_current_usage(
        self,
        user_id: str,
        feature: str | Feature,
        tier: str | Tier = Tier.FREE,
    ) -> UsageStats:
        """Read the counter without incrementing it."""
        feature = parse_feature(feature)
        limit = self.limit_for(feature, tier)
        if self._store is None:
            return UsageStats(current=0, limit=limit, remaining=get_remaining_usage(0, limit))

        key = usage_key(user_id, feature, self._clock())
        try:
            raw = await self._store.get(key)
        except CacheUnavailable as e:
            logger.warning("Usage read failed for %s: %s", key, e)
            return UsageStats(current=0, limit=limit, remaining=get_remaining_usage(0, limit))

        try:
            current = int(raw) if raw is not None else 0
        except ValueError:
            logger.warning("Non-integer usage counter %s=%r", key, raw)
            current = 0
        return UsageStats(current=current, limit=limit, remaining=get_remaining_usage(current, limit))

    async def reset_usage(self, user_id: str, feature: str | Feature) -> bool:
        """Delete this month's counter (admin operation)."""
        feature = parse_feature(feature)
        if self._store is None:
            return False
        key = usage_key(user_id, feature, self._clock())
        try:
            await self._store.delete(key)
        except CacheUnavailable as e:
            logger.error("Usage reset failed for %s: %s", key, e)
            return False
        logger.info("Reset usage for %s/%s", user_id, feature.value)
        return True

    async def get_all_usage_stats(
        self,
        user_id: str,
        tier: str | Tier = Tier.FREE,
    ) -> dict[str, UsageStats]:
        features = list(Feature)
        stats = await asyncio.gather(
            *(self.get_current_usage(user_id, f, tier) for f in features)
        )
        return {f.value: s for f, s in zip(features, stats)}

    @staticmethod
    def _fail_open(limit: int) -> UsageDecision:
        return UsageDecision(allowed=True, remaining=limit, limit=limit, current=0)
