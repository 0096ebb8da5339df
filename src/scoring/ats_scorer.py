# src/scoring/ats_scorer.py — v1
"""Deterministic ATS compatibility scoring.

Pure function of the resume text and the optional job description: no
network, no randomness, no shared state. The score is the half-up rounded
sum of three bands:

    format   0-40  tables, graphics, standard section headers
    keywords 0-40  fraction of job-description keywords found (20 if untargeted)
    content  0-20  action verbs and quantified achievements
"""

from __future__ import annotations

import math
import re

from careerai.core.models import ATSScore, MetricValue, Tip
from careerai.scoring.keywords import contains_term, extract_keywords

FORMAT_MAX = 40.0
KEYWORD_MAX = 40.0
CONTENT_MAX = 20.0

# Half credit: untargeted resumes are neither penalized nor rewarded.
UNTARGETED_KEYWORD_SCORE = 20.0

TABLE_CHARACTERS: tuple[str, ...] = ("|", "─", "│", "┼")
STANDARD_SECTIONS: tuple[str, ...] = (
    "experience",
    "education",
    "skills",
    "summary",
    "objective",
)
MIN_SECTIONS = 3

ACTION_VERBS: tuple[str, ...] = (
    "led",
    "managed",
    "developed",
    "created",
    "improved",
    "increased",
    "achieved",
    "implemented",
)
MIN_ACTION_VERBS = 3

QUANTIFIABLE_SATURATION = 5
MIN_QUANTIFIABLE = 3

_GRAPHIC_RE = re.compile(r"\[(?:image|graphic)\]", re.IGNORECASE)
_QUANTIFIABLE_RE = re.compile(r"[$€£]?\d+(?:[.,]\d+)*(?:%|[kmb]\b)?")


def score_resume(resume_text: str, job_description: str | None = None) -> ATSScore:
    """Score a resume for applicant-tracking-system compatibility.

    Args:
        resume_text: Plain text of the resume.
        job_description: Optional target job text. None, empty or blank
            means untargeted.

    Returns:
        ATSScore with the total, band subscores, keyword lists, tips and
        metrics.
    """
    text = resume_text.lower()
    tips: list[Tip] = []
    metrics: dict[str, MetricValue] = {}

    format_score = _score_format(text, tips, metrics)
    keyword_score, matched, missing = _score_keywords(text, job_description, tips, metrics)
    content_score = _score_content(text, tips, metrics)

    total = _round_half_up(format_score + keyword_score + content_score)

    return ATSScore(
        score=max(0, min(100, total)),
        keyword_score=_round_half_up(keyword_score),
        format_score=round(format_score, 2),
        content_score=round(content_score, 2),
        matched_keywords=matched,
        missing_keywords=missing,
        tips=tips,
        metrics=metrics,
    )


def _score_format(text: str, tips: list[Tip], metrics: dict[str, MetricValue]) -> float:
    score = 0.0

    if not any(ch in text for ch in TABLE_CHARACTERS):
        score += 10
    else:
        tips.append(Tip(
            type="critical",
            message="Avoid tables in your resume",
            explanation="ATS systems struggle to parse tabular data correctly",
            fix="Rewrite tables as plain bullet points under a section header",
            priority="high",
        ))

    if not _GRAPHIC_RE.search(text):
        score += 10
    else:
        tips.append(Tip(
            type="warning",
            message="Remove images and graphics",
            explanation="ATS cannot read images - use text only",
            fix="Replace logos, charts and icons with plain text",
            priority="high",
        ))

    found = [section for section in STANDARD_SECTIONS if section in text]
    score += len(found) / len(STANDARD_SECTIONS) * 20
    metrics["sectionsFound"] = len(found)

    if len(found) < MIN_SECTIONS:
        tips.append(Tip(
            type="warning",
            message="Use standard section headers",
            explanation="ATS looks for: Experience, Education, Skills, Summary",
            fix="Rename custom headings to Experience, Education, Skills and Summary",
            priority="medium",
        ))

    return score


def _score_keywords(
    text: str,
    job_description: str | None,
    tips: list[Tip],
    metrics: dict[str, MetricValue],
) -> tuple[float, list[str], list[str]]:
    if not job_description or not job_description.strip():
        return UNTARGETED_KEYWORD_SCORE, [], []

    keywords = extract_keywords(job_description)
    if not keywords:
        return UNTARGETED_KEYWORD_SCORE, [], []

    matched = [kw for kw in keywords if contains_term(text, kw)]
    missing = [kw for kw in keywords if kw not in matched]
    ratio = len(matched) / len(keywords)
    score = ratio * KEYWORD_MAX
    metrics["keywordMatch"] = _round_half_up(ratio * 100)

    if score < UNTARGETED_KEYWORD_SCORE:
        tips.append(Tip(
            type="critical",
            message=f"Only {len(matched)}/{len(keywords)} job keywords found",
            explanation="Add relevant keywords from the job description",
            fix="Mirror the job description's wording for skills you actually have: "
                + ", ".join(missing[:5]),
            priority="high",
        ))

    return score, matched, missing


def _score_content(text: str, tips: list[Tip], metrics: dict[str, MetricValue]) -> float:
    verbs = [verb for verb in ACTION_VERBS if contains_term(text, verb)]
    score = len(verbs) / len(ACTION_VERBS) * (CONTENT_MAX / 2)
    metrics["actionVerbs"] = len(verbs)

    if len(verbs) < MIN_ACTION_VERBS:
        tips.append(Tip(
            type="warning",
            message="Use more action verbs",
            explanation="Start bullet points with: Led, Managed, Developed, Achieved",
            fix="Open each bullet with a strong past-tense verb",
            priority="medium",
        ))

    quantifiable = len(_QUANTIFIABLE_RE.findall(text))
    score += min(quantifiable / QUANTIFIABLE_SATURATION, 1) * (CONTENT_MAX / 2)
    metrics["quantifiableResults"] = quantifiable

    if quantifiable < MIN_QUANTIFIABLE:
        tips.append(Tip(
            type="warning",
            message="Add quantifiable results",
            explanation='Include numbers, percentages, and metrics (e.g., "Increased sales by 25%")',
            fix="Attach a number, percentage or amount to your main achievements",
            priority="high",
        ))

    return score


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
