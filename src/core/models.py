# src/core/models.py — v2
"""Shared domain models: ResumeFeedback and its nodes, ATSScore, rewrite and job-match results.

Models accept both snake_case and camelCase input. ``to_wire()`` produces the
camelCase JSON shape consumed by the web client and stored in the cache.
"""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TipType = Literal["good", "improve", "warning", "critical"]
Priority = Literal["high", "medium", "low"]
Severity = Literal["critical", "major", "minor"]
IssueCategory = Literal["ATS", "Content", "Structure", "Skills", "Impact", "Grammar"]
Effort = Literal["quick", "moderate", "extensive"]

MetricValue = str | int | float


def clamp_score(value: float) -> int:
    """Round half-up and clamp into [0, 100]."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return 100 if value > 0 else 0
    return max(0, min(100, math.floor(value + 0.5)))


class WireModel(BaseModel):
    """Base for read-only models with a camelCase wire shape."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys, optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Tip(WireModel):
    """A single piece of advice attached to a category."""

    type: TipType = "improve"
    message: str
    explanation: str = ""
    fix: str = ""
    priority: Priority | None = None


class Issue(WireModel):
    """A concrete problem found in the resume."""

    severity: Severity = "minor"
    category: IssueCategory = "Content"
    description: str
    location: str | None = None
    fix: str = "Review and address this issue"


class Suggestion(WireModel):
    """An improvement recommendation."""

    id: str
    category: str = "General"
    title: str
    description: str = ""
    impact: Priority = "medium"
    effort: Effort = "moderate"
    priority: int = 1
    before: str | None = None
    after: str | None = None


class RoadmapItem(WireModel):
    """One step of the improvement roadmap."""

    action: str
    impact: Priority = "medium"
    time_to_complete: str = ""
    priority: int = 1
    category: str | None = None


class Roadmap(WireModel):
    quick_wins: list[RoadmapItem] = Field(default_factory=list)
    medium_term: list[RoadmapItem] = Field(default_factory=list)
    long_term: list[RoadmapItem] = Field(default_factory=list)


class AtsKeywords(WireModel):
    matched: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    score: int = 0

    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, v: Any) -> int:
        return clamp_score(float(v))


class JobMatch(WireModel):
    """Resume-to-job fit, present only for targeted analyses."""

    score: int = 0
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, v: Any) -> int:
        return clamp_score(float(v))


class CategoryScore(WireModel):
    """One weighted dimension of the overall feedback."""

    score: int = 0
    weight: float = 0.0
    tips: list[Tip] = Field(default_factory=list)
    issues: list[Issue] = Field(default_factory=list)
    metrics: dict[str, MetricValue] = Field(default_factory=dict)

    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, v: Any) -> int:
        return clamp_score(float(v))


class ResumeFeedback(WireModel):
    """Fully-populated analysis result. Every field always has a value."""

    overall_score: int = 0
    ats: CategoryScore = Field(default_factory=CategoryScore)
    content: CategoryScore = Field(default_factory=CategoryScore)
    structure: CategoryScore = Field(default_factory=CategoryScore)
    skills: CategoryScore = Field(default_factory=CategoryScore)
    impact: CategoryScore = Field(default_factory=CategoryScore)
    grammar: CategoryScore = Field(default_factory=CategoryScore)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    critical_issues: list[Issue] = Field(default_factory=list)
    suggestions: list[Suggestion] = Field(default_factory=list)
    ats_keywords: AtsKeywords = Field(default_factory=AtsKeywords)
    roadmap: Roadmap = Field(default_factory=Roadmap)
    job_match: JobMatch | None = None

    @field_validator("overall_score", mode="before")
    @classmethod
    def _clamp(cls, v: Any) -> int:
        return clamp_score(float(v))

    @property
    def categories(self) -> dict[str, CategoryScore]:
        return {
            "ats": self.ats,
            "content": self.content,
            "structure": self.structure,
            "skills": self.skills,
            "impact": self.impact,
            "grammar": self.grammar,
        }


class RewriteSuggestion(WireModel):
    version: int
    text: str
    improvements: list[str] = Field(default_factory=list)
    score: int = 0


class RewriteSuggestions(WireModel):
    """Alternative phrasings of a resume section."""

    suggestions: list[RewriteSuggestion] = Field(default_factory=list)


class Alignment(WireModel):
    technical: int = 0
    experience: int = 0
    culture: int = 0


class JobMatchAnalysis(WireModel):
    """Result of the dedicated resume-versus-job comparison."""

    match_score: int = 0
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    alignment: Alignment = Field(default_factory=Alignment)


class ATSScore(WireModel):
    """Deterministic, AI-free compatibility score of a resume."""

    score: int
    keyword_score: int
    format_score: float
    content_score: float
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    tips: list[Tip] = Field(default_factory=list)
    metrics: dict[str, MetricValue] = Field(default_factory=dict)
