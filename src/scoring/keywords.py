# src/scoring/keywords.py — v1
"""Keyword extraction from job descriptions for the ATS keyword band."""

from __future__ import annotations

import re
from collections import Counter

MAX_KEYWORDS = 30
TOP_WORDS = 20

TECHNICAL_VOCABULARY: tuple[str, ...] = (
    "python",
    "javascript",
    "react",
    "node",
    "aws",
    "docker",
    "sql",
    "agile",
    "scrum",
    "leadership",
    "management",
    "analysis",
    "design",
    "development",
)

STOPWORDS: frozenset[str] = frozenset({
    "the", "and", "with", "for", "this", "that", "you", "are", "will",
    "our", "your", "from", "have", "has", "who", "all", "can", "not",
})

_PHRASE_RE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")
_WORD_RE = re.compile(r"\b[a-z]{3,}\b")


def contains_term(text: str, term: str) -> bool:
    """Whole-word, case-insensitive containment."""
    return re.search(rf"\b{re.escape(term.lower())}\b", text.lower()) is not None


def extract_keywords(job_description: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """Build the keyword set a resume is checked against.

    The whole technical vocabulary comes first, whether or not the
    description mentions it, then capitalized multi-word phrases
    ("Machine Learning"), then the most frequent remaining words. Duplicates
    are dropped case-insensitively, keeping the first occurrence. Ordering
    is deterministic: frequency ties keep the order of first appearance.

    Args:
        job_description: Raw job description text.
        limit: Maximum number of keywords returned.

    Returns:
        Lowercase keywords, at most ``limit``.
    """
    lowered = job_description.lower()

    phrases = [m.group(0).lower() for m in _PHRASE_RE.finditer(job_description)]

    words = [w for w in _WORD_RE.findall(lowered) if w not in STOPWORDS]
    top_words = [word for word, _ in Counter(words).most_common(TOP_WORDS)]

    seen: set[str] = set()
    keywords: list[str] = []
    for candidate in (*TECHNICAL_VOCABULARY, *phrases, *top_words):
        normalized = " ".join(candidate.split())
        if normalized and normalized not in seen:
            seen.add(normalized)
            keywords.append(normalized)
    return keywords[:limit]
