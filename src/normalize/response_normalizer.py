# src/normalize/response_normalizer.py — v1
"""Turn raw AI text into strictly-typed results.

Given any JSON-shaped object, ``normalize_analysis`` returns a
fully-populated ResumeFeedback. It raises InvalidAIResponse only when the
text holds no ``{ ... }`` span at all; callers then fall back to the
heuristic ATS-only feedback. Unknown fields are dropped so prompt changes
that add fields never break parsing.
"""

from __future__ import annotations

import logging
from typing import Any

from careerai.core.models import (
    Alignment,
    JobMatchAnalysis,
    ResumeFeedback,
    RewriteSuggestion,
    RewriteSuggestions,
)
from careerai.normalize.fields import (
    coerce_ats_keywords,
    coerce_category,
    coerce_int,
    coerce_issue,
    coerce_job_match,
    coerce_list,
    coerce_roadmap,
    coerce_score,
    coerce_string_list,
    coerce_suggestion,
    coerce_text,
)
from careerai.normalize.json_extraction import InvalidAIResponse, extract_json_object

logger = logging.getLogger(__name__)

REWRITE_FALLBACK_SCORE = 50

# Category key -> (issue label, legacy key used by older prompts)
_CATEGORIES: dict[str, tuple[str, str | None]] = {
    "ats": ("ATS", "ATS"),
    "content": ("Content", None),
    "structure": ("Structure", None),
    "skills": ("Skills", None),
    "impact": ("Impact", None),
    "grammar": ("Grammar", "toneAndStyle"),
}


def normalize_analysis(
    raw_text: str,
    resume_text: str,
    job_description: str | None = None,
) -> ResumeFeedback:
    """Parse and repair an analysis response.

    Args:
        raw_text: Text returned by the model.
        resume_text: The analysed resume (kept for signature parity with
            the heuristic path and for logging).
        job_description: Target job text. jobMatch is only populated when
            this is non-blank.

    Returns:
        Fully-populated ResumeFeedback.

    Raises:
        InvalidAIResponse: If no JSON object is locatable in ``raw_text``.
    """
    raw = extract_json_object(raw_text)
    feedback = feedback_from_mapping(raw, targeted=bool(job_description and job_description.strip()))
    logger.debug(
        "Normalized analysis: overall=%d, %d suggestions (resume %d chars)",
        feedback.overall_score, len(feedback.suggestions), len(resume_text),
    )
    return feedback


def feedback_from_mapping(raw: dict[str, Any], targeted: bool = False) -> ResumeFeedback:
    """Build ResumeFeedback from an already-decoded JSON object."""
    categories = {}
    for key, (label, legacy_key) in _CATEGORIES.items():
        block = raw.get(key)
        if block is None and legacy_key is not None:
            block = raw.get(legacy_key)
        categories[key] = coerce_category(block, label)

    return ResumeFeedback(
        overall_score=coerce_score(raw.get("overallScore")),
        **categories,
        strengths=coerce_string_list(raw.get("strengths")),
        weaknesses=coerce_string_list(raw.get("weaknesses")),
        critical_issues=coerce_list(
            raw.get("criticalIssues"),
            lambda item, i: coerce_issue(item, i, "Content"),
        ),
        suggestions=coerce_list(raw.get("suggestions"), coerce_suggestion),
        ats_keywords=coerce_ats_keywords(raw.get("atsKeywords")),
        roadmap=coerce_roadmap(raw.get("roadmap"), raw.get("improvementRoadmap")),
        job_match=coerce_job_match(
            raw.get("jobMatch"), raw.get("skills"), raw.get("recommendations")
        ) if targeted else None,
    )


def normalize_rewrite(raw_text: str, original_text: str) -> RewriteSuggestions:
    """Parse rewrite alternatives for a resume section.

    Unlike analysis, a rewrite has a natural fallback: when no JSON is
    locatable the original text is returned as the single suggestion.
    """
    try:
        raw = extract_json_object(raw_text)
    except InvalidAIResponse:
        logger.warning("Rewrite response had no JSON, returning original text")
        return RewriteSuggestions(suggestions=[
            RewriteSuggestion(
                version=1,
                text=original_text,
                improvements=["Original text preserved due to parsing error"],
                score=REWRITE_FALLBACK_SCORE,
            )
        ])

    def element(item: Any, index: int) -> RewriteSuggestion | None:
        if isinstance(item, str):
            item = {"text": item}
        if not isinstance(item, dict):
            return None
        text = coerce_text(item.get("text"))
        if not text:
            return None
        return RewriteSuggestion(
            version=coerce_int(item.get("version"), index + 1),
            text=text,
            improvements=coerce_string_list(item.get("improvements")),
            score=coerce_score(item.get("score")),
        )

    return RewriteSuggestions(suggestions=coerce_list(raw.get("suggestions"), element))


def normalize_job_match(raw_text: str) -> JobMatchAnalysis:
    """Parse a dedicated job-match response.

    Raises:
        InvalidAIResponse: If no JSON object is locatable in ``raw_text``.
    """
    raw = extract_json_object(raw_text)
    alignment = raw.get("alignment") if isinstance(raw.get("alignment"), dict) else {}
    score = raw.get("matchScore")
    return JobMatchAnalysis(
        match_score=coerce_score(score if score is not None else raw.get("score")),
        matched_skills=coerce_string_list(raw.get("matchedSkills")),
        missing_skills=coerce_string_list(raw.get("missingSkills")),
        recommendations=coerce_string_list(raw.get("recommendations")),
        alignment=Alignment(
            technical=coerce_score(alignment.get("technical")),
            experience=coerce_score(alignment.get("experience")),
            culture=coerce_score(alignment.get("culture")),
        ),
    )
