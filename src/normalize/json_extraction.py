# src/normalize/json_extraction.py — v1
"""Locate and parse the JSON object inside free-form AI output.

Models asked for "only JSON" still wrap it in prose or markdown fences,
leave trailing commas, or stop mid-object when they hit the token limit.
The only unrecoverable case is output with no ``{ ... }`` span at all.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")
_CLOSERS = {"{": "}", "[": "]"}

MAX_NESTING_DEPTH = 64


class InvalidAIResponse(Exception):
    """No JSON object could be located in the AI output."""

    def __init__(self, message: str = "No JSON object found in AI response", raw: str = ""):
        self.raw_preview = raw[:200]
        super().__init__(message)


def extract_json_object(raw: str) -> dict[str, Any]:
    """Return the JSON object embedded in ``raw``.

    The greedy span from the first ``{`` to the last ``}`` is parsed first.
    Failing that, trailing commas are removed, then the first balanced
    object is decoded, then unterminated brackets are closed. If nothing
    parses the result is an empty dict, which downstream coercion turns
    into a fully-defaulted object. Output nested deeper than
    MAX_NESTING_DEPTH is discarded the same way.

    Raises:
        InvalidAIResponse: If ``raw`` contains no ``{`` ... ``}`` span.
    """
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end < start:
        raise InvalidAIResponse(raw=raw or "")

    candidate = raw[start:end + 1]

    depth = _nesting_depth(raw[start:])
    if depth > MAX_NESTING_DEPTH:
        logger.warning("AI response nested %d levels deep, discarding", depth)
        return {}

    for attempt in (
        lambda: json.loads(candidate),
        lambda: json.loads(_TRAILING_COMMA_RE.sub(r"\1", candidate)),
        lambda: json.JSONDecoder().raw_decode(raw[start:])[0],
        lambda: json.loads(_close_truncated(raw[start:])),
    ):
        try:
            parsed = attempt()
        except (json.JSONDecodeError, ValueError, RecursionError):
            continue
        if isinstance(parsed, dict):
            return parsed

    logger.warning(
        "AI response contained braces but no parseable object (%d chars)",
        len(candidate),
    )
    return {}


def _nesting_depth(text: str) -> int:
    """Deepest bracket nesting outside string literals."""
    depth = deepest = 0
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            depth += 1
            deepest = max(deepest, depth)
        elif ch in ("}", "]"):
            depth = max(0, depth - 1)
    return deepest


def _close_truncated(text: str) -> str:
    """Close strings and brackets left open by a truncated response."""
    stack: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ("}", "]") and stack and stack[-1] == ch:
            stack.pop()

    repaired = text + ('"' if in_string else "")
    repaired = repaired.rstrip().rstrip(",").rstrip(":")
    repaired = _TRAILING_COMMA_RE.sub(r"\1", repaired)
    return repaired + "".join(reversed(stack))
