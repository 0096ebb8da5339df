# src/usage/limits.py — v1
"""Subscription tiers, metered features and their monthly limits.

A limit of -1 means unlimited. Free and starter plans share the same
limits; pro and premium are unlimited for every feature.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from careerai.config.settings import Settings

UNLIMITED = -1


class Tier(str, Enum):
    FREE = "free"
    STARTER = "starter"
    PRO = "pro"
    PREMIUM = "premium"


class Feature(str, Enum):
    RESUME_ANALYSIS = "resume-analysis"
    COVER_LETTER = "cover-letter"
    MOCK_INTERVIEW = "mock-interview"
    STUDY_PLAN = "study-plan"


FEATURE_NAMES: dict[Feature, str] = {
    Feature.RESUME_ANALYSIS: "Resume Analyses",
    Feature.COVER_LETTER: "Cover Letters",
    Feature.MOCK_INTERVIEW: "Interview Sessions",
    Feature.STUDY_PLAN: "Study Plans",
}

FREE_LIMITS: dict[Feature, int] = {
    Feature.RESUME_ANALYSIS: 5,
    Feature.COVER_LETTER: 3,
    Feature.MOCK_INTERVIEW: 2,
    Feature.STUDY_PLAN: 3,
}

UNLIMITED_TIERS = frozenset({Tier.PRO, Tier.PREMIUM})

PlanLimits = dict[Tier, dict[Feature, int]]


def build_plan_limits(settings: Settings | None = None) -> PlanLimits:
    """Limits per tier, taking free-plan values from settings when given."""
    free = dict(FREE_LIMITS)
    if settings is not None:
        free = {
            Feature.RESUME_ANALYSIS: settings.usage_limit_resume_analysis,
            Feature.COVER_LETTER: settings.usage_limit_cover_letter,
            Feature.MOCK_INTERVIEW: settings.usage_limit_mock_interview,
            Feature.STUDY_PLAN: settings.usage_limit_study_plan,
        }
    limits: PlanLimits = {Tier.FREE: free, Tier.STARTER: dict(free)}
    for tier in UNLIMITED_TIERS:
        limits[tier] = {feature: UNLIMITED for feature in Feature}
    return limits


def parse_tier(value: str | Tier | None) -> Tier:
    """Case-insensitive tier lookup; unknown or missing tiers are free."""
    if isinstance(value, Tier):
        return value
    try:
        return Tier((value or "free").strip().lower())
    except ValueError:
        return Tier.FREE


def parse_feature(value: str | Feature) -> Feature:
    """Feature lookup.

    Raises:
        ValueError: If the feature is not metered.
    """
    if isinstance(value, Feature):
        return value
    try:
        return Feature(value)
    except ValueError:
        valid = ", ".join(f.value for f in Feature)
        raise ValueError(f"Unknown feature {value!r}. Valid: {valid}") from None


def get_feature_limit(
    tier: str | Tier,
    feature: str | Feature,
    limits: PlanLimits | None = None,
) -> int:
    table = limits or build_plan_limits()
    plan = table.get(parse_tier(tier), table[Tier.FREE])
    return plan[parse_feature(feature)]


def is_unlimited(limit: int) -> bool:
    return limit == UNLIMITED


def has_reached_limit(used: int, limit: int) -> bool:
    if is_unlimited(limit):
        return False
    return used >= limit


def get_remaining_usage(used: int, limit: int) -> int:
    if is_unlimited(limit):
        return UNLIMITED
    return max(0, limit - used)
