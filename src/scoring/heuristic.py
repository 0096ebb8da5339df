# src/scoring/heuristic.py — v1
"""Heuristic ResumeFeedback built from an ATSScore alone.

This is the degraded path used when the AI capability is absent, fails, or
returns nothing parseable: the user still gets a complete, schema-valid
feedback object, just a less detailed one.
"""

from __future__ import annotations

from careerai.core.models import (
    ATSScore,
    AtsKeywords,
    CategoryScore,
    Issue,
    JobMatch,
    ResumeFeedback,
    Roadmap,
    RoadmapItem,
    Suggestion,
    Tip,
    clamp_score,
)
from careerai.scoring.ats_scorer import (
    CONTENT_MAX,
    FORMAT_MAX,
    KEYWORD_MAX,
    QUANTIFIABLE_SATURATION,
)

CATEGORY_WEIGHTS: dict[str, float] = {
    "ats": 0.25,
    "content": 0.25,
    "structure": 0.15,
    "skills": 0.20,
    "impact": 0.10,
    "grammar": 0.05,
}

_PRIORITY_RANK = {"high": 1, "medium": 2, "low": 3}


def feedback_from_ats_score(
    ats: ATSScore,
    job_description: str | None = None,
) -> ResumeFeedback:
    """Project an ATSScore onto the full feedback schema.

    Args:
        ats: Result of score_resume().
        job_description: The job description the score was computed
            against, if any. Controls whether jobMatch is populated.

    Returns:
        Fully-populated ResumeFeedback.
    """
    quantified = int(ats.metrics.get("quantifiableResults", 0))
    keyword_pct = int(ats.metrics.get("keywordMatch", clamp_score(ats.keyword_score / KEYWORD_MAX * 100)))
    targeted = bool(job_description and job_description.strip())

    ranked_tips = sorted(ats.tips, key=lambda t: _PRIORITY_RANK.get(t.priority or "low", 3))

    feedback = ResumeFeedback(
        overall_score=ats.score,
        ats=CategoryScore(
            score=ats.score,
            weight=CATEGORY_WEIGHTS["ats"],
            tips=ats.tips,
            issues=[_issue_from_tip(t, "ATS") for t in ats.tips if t.type == "critical"],
            metrics=dict(ats.metrics),
        ),
        structure=CategoryScore(
            score=clamp_score(ats.format_score / FORMAT_MAX * 100),
            weight=CATEGORY_WEIGHTS["structure"],
            metrics={"sectionCount": ats.metrics.get("sectionsFound", 0)},
        ),
        content=CategoryScore(
            score=clamp_score(ats.content_score / CONTENT_MAX * 100),
            weight=CATEGORY_WEIGHTS["content"],
            metrics={"quantifiableResults": quantified},
        ),
        skills=CategoryScore(
            score=clamp_score(ats.keyword_score / KEYWORD_MAX * 100),
            weight=CATEGORY_WEIGHTS["skills"],
            metrics={"matchedKeywords": len(ats.matched_keywords)},
        ),
        impact=CategoryScore(
            score=clamp_score(min(quantified / QUANTIFIABLE_SATURATION, 1) * 100),
            weight=CATEGORY_WEIGHTS["impact"],
            metrics={"actionVerbCount": ats.metrics.get("actionVerbs", 0)},
        ),
        grammar=CategoryScore(
            score=ats.score,
            weight=CATEGORY_WEIGHTS["grammar"],
            tips=[Tip(
                type="improve",
                message="Grammar was not reviewed",
                explanation="Detailed language feedback needs the AI analysis",
                fix="Proofread the resume or re-run the analysis later",
            )],
        ),
        strengths=_strengths(ats),
        weaknesses=[t.message for t in ranked_tips],
        critical_issues=[_issue_from_tip(t, "ATS") for t in ats.tips if t.type == "critical"],
        suggestions=[
            Suggestion(
                id=f"suggestion-{i}",
                category="ATS",
                title=t.message,
                description=t.explanation,
                impact=t.priority or "medium",
                effort="quick",
                priority=i,
            )
            for i, t in enumerate(ranked_tips, start=1)
        ],
        ats_keywords=AtsKeywords(
            matched=ats.matched_keywords,
            missing=ats.missing_keywords,
            score=keyword_pct,
        ),
        roadmap=Roadmap(
            quick_wins=[
                RoadmapItem(
                    action=t.fix or t.message,
                    impact=t.priority or "medium",
                    time_to_complete="15-30 minutes",
                    priority=i,
                    category="ATS",
                )
                for i, t in enumerate(ranked_tips, start=1)
            ],
        ),
        job_match=JobMatch(
            score=keyword_pct,
            matched_skills=ats.matched_keywords,
            missing_skills=ats.missing_keywords,
            recommendations=[f"Show evidence of {kw} if you have it" for kw in ats.missing_keywords[:5]],
        ) if targeted else None,
    )
    return feedback


def _issue_from_tip(tip: Tip, category: str) -> Issue:
    return Issue(
        severity="critical" if tip.type == "critical" else "major",
        category=category,
        description=tip.message,
        fix=tip.fix or tip.explanation or "Review and address this issue",
    )


def _strengths(ats: ATSScore) -> list[str]:
    strengths: list[str] = []
    if not any(t.message.startswith("Avoid tables") for t in ats.tips):
        strengths.append("Plain-text layout that ATS parsers can read")
    if int(ats.metrics.get("sectionsFound", 0)) >= 3:
        strengths.append("Uses standard section headers")
    if int(ats.metrics.get("actionVerbs", 0)) >= 3:
        strengths.append("Bullets open with strong action verbs")
    if int(ats.metrics.get("quantifiableResults", 0)) >= 3:
        strengths.append("Achievements are quantified")
    if ats.matched_keywords:
        strengths.append(f"Matches {len(ats.matched_keywords)} job keywords")
    return strengths
