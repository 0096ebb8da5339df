# src/normalize/fields.py — v1
"""Per-node coercion of untrusted AI output into the feedback schema.

One function per schema node. Each accepts any JSON value and returns a
valid node; nothing in this module raises. Repair rules:

    score        number or numeric string, rounded half-up, clamped to
                 [0, 100]; anything else -> 0
    weight       finite number -> float, anything else -> 0.0
    string list  None -> [], "x" -> ["x"], dict -> its text-like value,
                 other scalars -> str(), blanks dropped
    tip          "x" -> {type: improve, message: x}
    issue        "x" -> {description: x, severity: minor,
                 fix: "Review and address this issue"}
    suggestion   "x" -> {id: suggestion-N, title: x, description: x}
    roadmap item "x" -> {action: x}
    metrics      str/int/float kept, other values JSON-stringified,
                 non-dict -> {}
    enums        matched case-insensitively, unknown values -> default
"""

from __future__ import annotations

import json
import math
from typing import Any, Callable, TypeVar

from careerai.core.models import (
    AtsKeywords,
    CategoryScore,
    Issue,
    JobMatch,
    MetricValue,
    Roadmap,
    RoadmapItem,
    Suggestion,
    Tip,
    clamp_score,
)

T = TypeVar("T")

DEFAULT_ISSUE_FIX = "Review and address this issue"

_TIP_TYPES = ("good", "improve", "warning", "critical")
_PRIORITIES = ("high", "medium", "low")
_SEVERITIES = ("critical", "major", "minor")
_EFFORTS = ("quick", "moderate", "extensive")
_ISSUE_CATEGORIES = {
    "ats": "ATS",
    "content": "Content",
    "structure": "Structure",
    "skills": "Skills",
    "impact": "Impact",
    "grammar": "Grammar",
}
_TEXT_KEYS = ("text", "description", "message", "tip", "name", "title", "action", "value")


def _dumps(value: Any, **kwargs: Any) -> str:
    try:
        return json.dumps(value, default=str, **kwargs)
    except (RecursionError, ValueError):
        return ""


def coerce_score(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return max(0, min(100, value))
    if isinstance(value, float):
        return clamp_score(value)
    if isinstance(value, str):
        try:
            return clamp_score(float(value.strip().rstrip("%")))
        except ValueError:
            return 0
    return 0


def coerce_weight(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        weight = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return weight if math.isfinite(weight) else 0.0


def coerce_int(value: Any, default: int) -> int:
    """Positive integer such as a priority or version; default otherwise."""
    if isinstance(value, bool):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number >= 1 else default


def coerce_text(value: Any, default: str = "") -> str:
    """Best-effort single string from any JSON value."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, dict):
        for key in _TEXT_KEYS:
            if isinstance(value.get(key), str) and value[key].strip():
                return value[key].strip()
        return _dumps(value, sort_keys=True)
    if isinstance(value, list):
        return _dumps(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce_choice(value: Any, choices: tuple[str, ...], default: str) -> str:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in choices:
            return lowered
    return default


def coerce_list(value: Any, element: Callable[[Any, int], T | None]) -> list[T]:
    """Coerce a JSON array element by element; None results are skipped."""
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    items: list[T] = []
    for index, raw in enumerate(value):
        item = element(raw, index)
        if item is not None:
            items.append(item)
    return items


def coerce_string_list(value: Any) -> list[str]:
    return coerce_list(value, lambda raw, _: coerce_text(raw) or None)


def coerce_metrics(value: Any) -> dict[str, MetricValue]:
    if not isinstance(value, dict):
        return {}
    metrics: dict[str, MetricValue] = {}
    for key, raw in value.items():
        if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
            metrics[str(key)] = _dumps(raw)
        elif isinstance(raw, float) and not math.isfinite(raw):
            metrics[str(key)] = str(raw)
        else:
            metrics[str(key)] = raw
    return metrics


def coerce_tip(raw: Any, index: int = 0) -> Tip | None:
    if isinstance(raw, dict):
        message = coerce_text(raw.get("message")) or coerce_text(raw.get("tip"))
        if not message:
            return None
        priority = raw.get("priority")
        return Tip(
            type=coerce_choice(raw.get("type"), _TIP_TYPES, "improve"),
            message=message,
            explanation=coerce_text(raw.get("explanation")),
            fix=coerce_text(raw.get("fix")),
            priority=coerce_choice(priority, _PRIORITIES, "medium") if priority is not None else None,
        )
    message = coerce_text(raw)
    return Tip(type="improve", message=message) if message else None


def coerce_issue(raw: Any, index: int = 0, category: str = "Content") -> Issue | None:
    if isinstance(raw, dict):
        description = coerce_text(raw.get("description")) or coerce_text(raw.get("issue"))
        if not description:
            return None
        location = raw.get("location")
        raw_category = raw.get("category")
        return Issue(
            severity=coerce_choice(raw.get("severity"), _SEVERITIES, "minor"),
            category=_ISSUE_CATEGORIES.get(
                raw_category.strip().lower() if isinstance(raw_category, str) else "",
                category,
            ),
            description=description,
            location=coerce_text(location) or None,
            fix=coerce_text(raw.get("fix")) or DEFAULT_ISSUE_FIX,
        )
    description = coerce_text(raw)
    if not description:
        return None
    return Issue(description=description, severity="minor", category=category, fix=DEFAULT_ISSUE_FIX)


def coerce_suggestion(raw: Any, index: int = 0) -> Suggestion | None:
    position = index + 1
    if isinstance(raw, dict):
        title = coerce_text(raw.get("title"))
        description = coerce_text(raw.get("description"))
        if not title and not description:
            return None
        return Suggestion(
            id=coerce_text(raw.get("id")) or f"suggestion-{position}",
            category=coerce_text(raw.get("category")) or "General",
            title=title or description,
            description=description,
            impact=coerce_choice(raw.get("impact"), _PRIORITIES, "medium"),
            effort=coerce_choice(raw.get("effort"), _EFFORTS, "moderate"),
            priority=coerce_int(raw.get("priority"), position),
            before=coerce_text(raw.get("before")) or None,
            after=coerce_text(raw.get("after")) or None,
        )
    text = coerce_text(raw)
    if not text:
        return None
    return Suggestion(id=f"suggestion-{position}", title=text, description=text, priority=position)


def coerce_roadmap_item(raw: Any, index: int = 0) -> RoadmapItem | None:
    position = index + 1
    if isinstance(raw, dict):
        action = coerce_text(raw.get("action")) or coerce_text(raw.get("description"))
        if not action:
            return None
        return RoadmapItem(
            action=action,
            impact=coerce_choice(raw.get("impact"), _PRIORITIES, "medium"),
            time_to_complete=coerce_text(raw.get("timeToComplete") or raw.get("time_to_complete")),
            priority=coerce_int(raw.get("priority"), position),
            category=coerce_text(raw.get("category")) or None,
        )
    action = coerce_text(raw)
    return RoadmapItem(action=action, priority=position) if action else None


def coerce_category(raw: Any, category: str) -> CategoryScore:
    """Coerce one category block; ``category`` labels its bare-string issues."""
    if not isinstance(raw, dict):
        # A bare number is read as the score.
        return CategoryScore(score=coerce_score(raw))
    return CategoryScore(
        score=coerce_score(raw.get("score")),
        weight=coerce_weight(raw.get("weight")),
        tips=coerce_list(raw.get("tips"), coerce_tip),
        issues=coerce_list(raw.get("issues"), lambda item, i: coerce_issue(item, i, category)),
        metrics=coerce_metrics(raw.get("metrics")),
    )


def coerce_ats_keywords(raw: Any) -> AtsKeywords:
    block = raw if isinstance(raw, dict) else {}
    return AtsKeywords(
        matched=coerce_string_list(block.get("matched")),
        missing=coerce_string_list(block.get("missing")),
        score=coerce_score(block.get("score")),
    )


def coerce_roadmap(raw: Any, legacy: Any = None) -> Roadmap:
    """Coerce the roadmap, falling back to legacy field names."""
    block = raw if isinstance(raw, dict) else {}
    old = legacy if isinstance(legacy, dict) else {}

    def pick(*candidates: Any) -> Any:
        for candidate in candidates:
            if candidate is not None:
                return candidate
        return None

    return Roadmap(
        quick_wins=coerce_list(
            pick(block.get("quickWins"), old.get("quickWins")), coerce_roadmap_item
        ),
        medium_term=coerce_list(
            pick(block.get("mediumTerm"), block.get("mediumTermGoals"), old.get("mediumTermGoals")),
            coerce_roadmap_item,
        ),
        long_term=coerce_list(
            pick(block.get("longTerm"), block.get("longTermStrategies"), old.get("longTermStrategies")),
            coerce_roadmap_item,
        ),
    )


def coerce_job_match(raw: Any, skills: Any, recommendations: Any) -> JobMatch:
    block = raw if isinstance(raw, dict) else {}
    skills_block = skills if isinstance(skills, dict) else {}

    def first(key: str, fallback: Any) -> Any:
        value = block.get(key)
        return value if value is not None else fallback

    return JobMatch(
        score=coerce_score(first("score", block.get("matchScore"))),
        matched_skills=coerce_string_list(first("matchedSkills", skills_block.get("matchedSkills"))),
        missing_skills=coerce_string_list(first("missingSkills", skills_block.get("missingSkills"))),
        recommendations=coerce_string_list(first("recommendations", recommendations)),
    )
