# src/usage/models.py — v1
"""Usage metering models: UsageDecision, UsageStats, RewardResult, RewardStatus."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _UsageModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class UsageDecision(_UsageModel):
    """Outcome of a metered call. Denial is a value, never an exception.

    ``limit`` and ``remaining`` are -1 for unlimited tiers.
    """

    allowed: bool
    remaining: int
    limit: int
    current: int


class UsageStats(_UsageModel):
    """Current month's usage of one feature, without incrementing."""

    current: int
    limit: int
    remaining: int


class RewardResult(_UsageModel):
    rewarded: bool
    already_claimed: bool = False
    amount: int = 0
    new_usage: int | None = None
    message: str = ""


class RewardStatus(_UsageModel):
    claimed: bool
    date: datetime | None = None
    amount: int = 0
