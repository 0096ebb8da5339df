# tests/unit/usage/test_limits.py — v1
"""Tests for usage/limits.py — plans and limit helpers."""

from __future__ import annotations

import pytest

from careerai.config.settings import Settings
from careerai.usage.limits import (
    UNLIMITED,
    Feature,
    Tier,
    build_plan_limits,
    get_feature_limit,
    get_remaining_usage,
    has_reached_limit,
    is_unlimited,
    parse_feature,
    parse_tier,
)


class TestPlanLimits:
    def test_free_limits(self):
        limits = build_plan_limits()
        assert limits[Tier.FREE] == {
            Feature.RESUME_ANALYSIS: 5,
            Feature.COVER_LETTER: 3,
            Feature.MOCK_INTERVIEW: 2,
            Feature.STUDY_PLAN: 3,
        }

    def test_starter_matches_free(self):
        limits = build_plan_limits()
        assert limits[Tier.STARTER] == limits[Tier.FREE]

    @pytest.mark.parametrize("tier", [Tier.PRO, Tier.PREMIUM])
    def test_paid_tiers_unlimited(self, tier):
        assert all(v == UNLIMITED for v in build_plan_limits()[tier].values())

    def test_limits_from_settings(self):
        s = Settings(_env_file=None, usage_limit_resume_analysis=10)
        assert build_plan_limits(s)[Tier.FREE][Feature.RESUME_ANALYSIS] == 10
        assert build_plan_limits(s)[Tier.PRO][Feature.RESUME_ANALYSIS] == UNLIMITED


class TestParsing:
    def test_tier_case_insensitive(self):
        assert parse_tier("PRO") is Tier.PRO

    def test_unknown_tier_is_free(self):
        assert parse_tier("enterprise") is Tier.FREE
        assert parse_tier(None) is Tier.FREE

    def test_unknown_feature_raises(self):
        with pytest.raises(ValueError, match="Unknown feature"):
            parse_feature("time-travel")

    def test_get_feature_limit(self):
        assert get_feature_limit("free", "mock-interview") == 2
        assert get_feature_limit("premium", Feature.COVER_LETTER) == UNLIMITED


class TestHelpers:
    def test_is_unlimited(self):
        assert is_unlimited(-1)
        assert not is_unlimited(0)

    def test_has_reached_limit(self):
        assert has_reached_limit(5, 5)
        assert not has_reached_limit(4, 5)
        assert not has_reached_limit(1000, UNLIMITED)

    def test_remaining(self):
        assert get_remaining_usage(2, 5) == 3
        assert get_remaining_usage(9, 5) == 0
        assert get_remaining_usage(9, UNLIMITED) == UNLIMITED
