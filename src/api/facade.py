# src/api/facade.py — v2
"""Public API facade: resume analysis, section rewrite and job matching.

Usage:
    from careerai.api.facade import analyze_resume
    outcome = await analyze_resume(request, llm=client, cache=cache, limiter=limiter)

Analysis control flow:
  1. Meter the call; a denied call returns status="quota_exceeded".
  2. Look up the analysis cache by content hash; a hit returns as-is.
  3. Score the resume deterministically, ask the model, normalize and
     cache the result.
  4. Without a model, or when the call or parsing fails, return heuristic
     feedback built from the ATS score. Heuristic feedback is not cached.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from careerai.api.models import AnalysisOutcome, AnalysisRequest, RewriteRequest
from careerai.cache.fingerprint import (
    DEFAULT_FINGERPRINT_LENGTH,
    analysis_cache_key,
    hash_payload,
)
from careerai.core.models import JobMatchAnalysis, ResumeFeedback, RewriteSuggestions
from careerai.llm.prompts import (
    build_analysis_prompt,
    build_job_match_prompt,
    build_rewrite_prompt,
)
from careerai.llm.retry import LLMRetryExhausted, with_retry
from careerai.logging.context import set_feature_context
from careerai.normalize.json_extraction import InvalidAIResponse
from careerai.normalize.response_normalizer import (
    normalize_analysis,
    normalize_job_match,
    normalize_rewrite,
)
from careerai.scoring.ats_scorer import score_resume
from careerai.scoring.heuristic import feedback_from_ats_score
from careerai.usage.limiter import UsageLimiter
from careerai.usage.limits import Feature

if TYPE_CHECKING:
    from careerai.cache.resume_cache import CacheStore
    from careerai.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


async def analyze_resume(
    request: AnalysisRequest,
    *,
    llm: BaseLLMClient | None,
    cache: CacheStore | None,
    limiter: UsageLimiter | None,
) -> AnalysisOutcome:
    """Analyze a resume end-to-end.

    Args:
        request: Resume text, optional job description and the caller.
        llm: AI capability. None means heuristic feedback only.
        cache: Analysis cache. None means every call is a miss. Its
            fingerprint_length sets the content hash length.
        limiter: Usage metering. None is treated like an absent store
            (allowed, not counted).

    Returns:
        AnalysisOutcome. ``feedback`` is always populated unless the quota
        was exceeded.
    """
    set_feature_context(Feature.RESUME_ANALYSIS.value)
    content_hash = analysis_cache_key(
        request.resume_text, request.job_description, _key_length(cache)
    )

    limiter = limiter or UsageLimiter(None)
    decision = await limiter.check_and_increment(
        request.user_id, Feature.RESUME_ANALYSIS, request.tier
    )
    if not decision.allowed:
        logger.info("Analysis quota exceeded for %s", request.user_id)
        return AnalysisOutcome(status="quota_exceeded", content_hash=content_hash, usage=decision)

    if cache is not None:
        cached = await cache.get_analysis(content_hash)
        if cached is not None:
            logger.info("Analysis served from cache: %s", content_hash)
            return AnalysisOutcome(
                status="ok", source="cache", content_hash=content_hash,
                feedback=cached, usage=decision,
            )

    ats = score_resume(request.resume_text, request.job_description)
    warnings: list[str] = []

    feedback: ResumeFeedback | None = None
    if llm is None:
        warnings.append("AI analysis unavailable, showing ATS-based feedback")
    else:
        prompt = build_analysis_prompt(
            request.resume_text,
            request.job_description,
            request.job_title,
            request.company_name,
        )
        try:
            raw = await with_retry(llm.generate, prompt, task="analysis")
            feedback = normalize_analysis(raw, request.resume_text, request.job_description)
        except LLMRetryExhausted as e:
            logger.error("AI analysis failed: %s", e)
            warnings.append("AI analysis failed, showing ATS-based feedback")
        except InvalidAIResponse as e:
            logger.warning("AI analysis returned no JSON (%s): %r", e, e.raw_preview)
            warnings.append("AI response could not be parsed, showing ATS-based feedback")

    if feedback is None:
        return AnalysisOutcome(
            status="ok",
            source="heuristic",
            content_hash=content_hash,
            feedback=feedback_from_ats_score(ats, request.job_description),
            ats_score=ats,
            usage=decision,
            warnings=warnings,
        )

    if cache is not None:
        await cache.set_analysis(content_hash, feedback)
    logger.info("Analysis complete: overall=%d, ats=%d", feedback.overall_score, ats.score)
    return AnalysisOutcome(
        status="ok", source="ai", content_hash=content_hash,
        feedback=feedback, ats_score=ats, usage=decision,
    )


async def rewrite_section(
    request: RewriteRequest,
    *,
    llm: BaseLLMClient,
    cache: CacheStore | None = None,
) -> RewriteSuggestions:
    """Suggest improved phrasings of one resume section.

    Results are cached under the fixes namespace, keyed by every input
    that shapes the prompt.

    Raises:
        LLMRetryExhausted: If the model call fails.
    """
    key = hash_payload(request.model_dump(), _key_length(cache))
    if cache is not None:
        cached = await cache.get_fixes(key)
        if cached is not None:
            logger.info("Rewrite served from cache: %s", key)
            return cached

    prompt = build_rewrite_prompt(
        request.original_text,
        role=request.role,
        tone=request.tone,
        context=request.context,
        target=request.target,
    )
    raw = await with_retry(llm.generate, prompt, task="rewrite")
    suggestions = normalize_rewrite(raw, request.original_text)

    if cache is not None and suggestions.suggestions:
        await cache.set_fixes(key, suggestions)
    return suggestions


async def match_job(
    resume_text: str,
    job_description: str,
    *,
    llm: BaseLLMClient,
) -> JobMatchAnalysis:
    """Compare a resume with a job description.

    Raises:
        ValueError: If either text is blank.
        LLMRetryExhausted: If the model call fails.
        InvalidAIResponse: If the model returned no JSON object.
    """
    if not resume_text.strip() or not job_description.strip():
        raise ValueError("resume_text and job_description are both required")
    prompt = build_job_match_prompt(resume_text, job_description)
    raw = await with_retry(llm.generate, prompt, task="job_match")
    return normalize_job_match(raw)


def _key_length(cache: CacheStore | None) -> int:
    return cache.fingerprint_length if cache is not None else DEFAULT_FINGERPRINT_LENGTH
