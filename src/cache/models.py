# src/cache/models.py — v2
"""Cache domain models: CacheNamespace, NamespacePolicy, CachedEntry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from careerai.config.settings import Settings

_DAY = 24 * 60 * 60


class CacheNamespace(str, Enum):
    """Logical cache partitions. The value is the key prefix."""

    ANALYSIS = "resume:analysis"
    EXTRACTED_TEXT = "resume:text"
    FIXES = "resume:fixes"
    RESUME_RECORD = "resume:record"
    USER_PROFILE = "user:profile"
    INTERVIEW_FEEDBACK = "feedback"


@dataclass(frozen=True)
class NamespacePolicy:
    """Key prefix and TTL for one namespace."""

    namespace: CacheNamespace
    ttl_seconds: int

    def key(self, key: str) -> str:
        """Build the fully qualified store key."""
        return f"{self.namespace.value}:{key}"


# Immutable truths live long, regenerable AI output medium, billing-driven
# profile data short.
DEFAULT_TTLS: dict[CacheNamespace, int] = {
    CacheNamespace.ANALYSIS: 7 * _DAY,
    CacheNamespace.EXTRACTED_TEXT: 30 * _DAY,
    CacheNamespace.FIXES: 7 * _DAY,
    CacheNamespace.RESUME_RECORD: 30 * _DAY,
    CacheNamespace.USER_PROFILE: 5 * 60,
    CacheNamespace.INTERVIEW_FEEDBACK: 7 * _DAY,
}


def default_policies(
    settings: Settings | None = None,
) -> dict[CacheNamespace, NamespacePolicy]:
    """Build namespace policies, taking TTLs from settings when given."""
    if settings is None:
        return {ns: NamespacePolicy(ns, ttl) for ns, ttl in DEFAULT_TTLS.items()}

    ttls = {
        CacheNamespace.ANALYSIS: settings.cache_ttl_analysis,
        CacheNamespace.EXTRACTED_TEXT: settings.cache_ttl_extracted_text,
        CacheNamespace.FIXES: settings.cache_ttl_fixes,
        CacheNamespace.RESUME_RECORD: settings.cache_ttl_resume_record,
        CacheNamespace.USER_PROFILE: settings.cache_ttl_user_profile,
        CacheNamespace.INTERVIEW_FEEDBACK: settings.cache_ttl_interview_feedback,
    }
    return {ns: NamespacePolicy(ns, ttl) for ns, ttl in ttls.items()}


def interview_feedback_key(user_id: str, interview_id: str) -> str:
    """Key of a user's feedback for one interview."""
    return f"{user_id}:{interview_id}"


class CachedEntry(BaseModel):
    """Stored cache payload. Written whole, never patched."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    value: Any
    cached_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="cachedAt"
    )
