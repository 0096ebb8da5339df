# src/api/models.py — v2
"""API-level models: AnalysisRequest, RewriteRequest, AnalysisOutcome."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from careerai.core.models import ATSScore, ResumeFeedback
from careerai.usage.limits import Feature, Tier
from careerai.usage.models import UsageDecision

AnalysisStatus = Literal["ok", "quota_exceeded"]
AnalysisSource = Literal["cache", "ai", "heuristic"]


class AnalysisRequest(BaseModel):
    """A resume to analyze, optionally against a job description."""

    resume_text: str
    job_description: str | None = None
    job_title: str | None = None
    company_name: str | None = None
    user_id: str = "anonymous"
    tier: Tier = Tier.FREE

    @field_validator("resume_text")
    @classmethod
    def validate_resume_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("resume_text must not be empty")
        return v


class RewriteRequest(BaseModel):
    """A resume section to rephrase."""

    original_text: str
    role: str | None = None
    tone: str | None = None
    context: str | None = None
    target: str | None = None

    @field_validator("original_text")
    @classmethod
    def validate_original_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("original_text must not be empty")
        return v


class AnalysisOutcome(BaseModel):
    """Return value of analyze_resume().

    ``feedback`` is None only when the quota was exceeded.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: AnalysisStatus
    source: AnalysisSource | None = None
    content_hash: str
    feedback: ResumeFeedback | None = None
    ats_score: ATSScore | None = None
    usage: UsageDecision
    feature: Feature = Feature.RESUME_ANALYSIS
    warnings: list[str] = Field(default_factory=list)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
