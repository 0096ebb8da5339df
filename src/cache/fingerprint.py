# src/cache/fingerprint.py — v3
"""Content fingerprinting for the content-addressed cache.

Two documents that differ only in letter case or whitespace (a PDF exported
twice, a copy-paste with different line breaks) must produce the same key so
the expensive AI analysis is not paid for again.
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any

DEFAULT_FINGERPRINT_LENGTH = 32

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, trim and collapse whitespace runs to a single space."""
    return _WHITESPACE_RE.sub(" ", text.lower().strip())


def hash_content(text: str, length: int = DEFAULT_FINGERPRINT_LENGTH) -> str:
    """Return the fingerprint of a document's text.

    Args:
        text: Any document text, including the empty string.
        length: Number of hex characters kept from the SHA-256 digest.

    Returns:
        Fixed-length lowercase hex string.
    """
    digest = hashlib.sha256(normalize_text(text).encode("utf-8")).hexdigest()
    return digest[:length]


def analysis_cache_key(
    resume_text: str,
    job_description: str | None = None,
    length: int = DEFAULT_FINGERPRINT_LENGTH,
) -> str:
    """Key for an analysis result.

    Untargeted analyses are keyed by the resume alone. A targeted key hashes
    the normalized resume and job description as separate JSON array items,
    so moving text across the boundary changes the key.
    """
    if job_description and job_description.strip():
        return hash_payload([normalize_text(resume_text), normalize_text(job_description)], length)
    return hash_content(resume_text, length)


def hash_payload(payload: Any, length: int = DEFAULT_FINGERPRINT_LENGTH) -> str:
    """Fingerprint a JSON-able payload built from several inputs."""
    canonical = json.dumps(payload, sort_keys=True, default=str, ensure_ascii=False)
    return hash_content(canonical, length)
