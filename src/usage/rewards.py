# src/usage/rewards.py — v1
"""One-time usage credits granted for leaving product feedback.

Credits are applied to the persisted usage fields of the user document
(``usage.resumesUsed`` and friends), floored at zero. Each feature can be
rewarded once per user; the claim is recorded under
``rewards.feedback_reward_<feature>``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from careerai.cache.models import CacheNamespace
from careerai.cache.resume_cache import CacheStore
from careerai.storage.base_document_store import BaseDocumentStore, UserNotFound
from careerai.storage.records import USERS
from careerai.usage.limits import Feature, parse_feature
from careerai.usage.models import RewardResult, RewardStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewardCredit:
    usage_field: str
    amount: int
    label: str


REWARD_CREDITS: dict[Feature, RewardCredit] = {
    Feature.RESUME_ANALYSIS: RewardCredit("resumesUsed", 2, "2 free resume reviews"),
    Feature.COVER_LETTER: RewardCredit("coverLettersUsed", 2, "2 free cover letters"),
    Feature.STUDY_PLAN: RewardCredit("studyPlansUsed", 1, "1 free study plan"),
    Feature.MOCK_INTERVIEW: RewardCredit("interviewsUsed", 1, "1 free interview session"),
}


def reward_flag(feature: Feature) -> str:
    return f"feedback_reward_{feature.value}"


async def claim_feedback_reward(
    documents: BaseDocumentStore,
    user_id: str,
    feature: str | Feature,
    *,
    cache: CacheStore | None = None,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> RewardResult:
    """Credit the user's usage for ``feature`` once.

    Args:
        documents: System of record holding the ``users`` collection.
        user_id: User claiming the reward.
        feature: Metered feature to credit.
        cache: When given, the cached user profile is invalidated.
        clock: Time source for the claim date.

    Raises:
        ValueError: If ``feature`` is not metered.
        UserNotFound: If the user document does not exist.
    """
    feature = parse_feature(feature)
    credit = REWARD_CREDITS[feature]
    flag = reward_flag(feature)

    user = await documents.get(USERS, user_id)
    if user is None:
        raise UserNotFound(user_id)

    rewards = user.get("rewards") or {}
    if rewards.get(flag):
        logger.info("Reward %s already claimed by %s", flag, user_id)
        return RewardResult(
            rewarded=False,
            already_claimed=True,
            message="Already rewarded for this feature",
        )

    usage = user.get("usage") or {}
    try:
        previous = int(usage.get(credit.usage_field) or 0)
    except (TypeError, ValueError):
        previous = 0
    new_usage = max(0, previous - credit.amount)

    now = clock().isoformat()
    await documents.update(USERS, user_id, {
        f"usage.{credit.usage_field}": new_usage,
        f"rewards.{flag}": True,
        f"rewards.{flag}_date": now,
        f"rewards.{flag}_amount": credit.amount,
        f"rewards.{flag}_type": credit.usage_field,
        "updatedAt": now,
    })
    if cache is not None:
        await cache.delete(CacheNamespace.USER_PROFILE, user_id)

    logger.info(
        "Rewarded %s with %s (%s: %d -> %d)",
        user_id, credit.label, credit.usage_field, previous, new_usage,
    )
    return RewardResult(
        rewarded=True,
        amount=credit.amount,
        new_usage=new_usage,
        message=f"Successfully added {credit.label}",
    )


async def get_reward_status(documents: BaseDocumentStore, user_id: str) -> dict[str, RewardStatus]:
    """Claim state of every feature reward for one user.

    Raises:
        UserNotFound: If the user document does not exist.
    """
    user = await documents.get(USERS, user_id)
    if user is None:
        raise UserNotFound(user_id)
    rewards = user.get("rewards") or {}

    status: dict[str, RewardStatus] = {}
    for feature in Feature:
        flag = reward_flag(feature)
        date = rewards.get(f"{flag}_date")
        status[feature.value] = RewardStatus(
            claimed=bool(rewards.get(flag)),
            date=date if isinstance(date, str) and date else None,
            amount=int(rewards.get(f"{flag}_amount") or 0),
        )
    return status
