# src/llm/retry.py — v2
"""Retry policy for AI calls with per-error-type exponential backoff.

Only transient failures are retried. Anything unclassified fails fast so
the caller can fall back to heuristic feedback without waiting.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class LLMRetryExhausted(Exception):
    """The AI call failed and no retries remain."""

    def __init__(self, task: str, error_type: str, attempts: int, last_error: Exception):
        self.task = task
        self.error_type = error_type
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"AI task '{task}' failed after {attempts} attempt(s) ({error_type}): {last_error}"
        )


@dataclass(frozen=True)
class RetryConfig:
    """Retry budget for one error type."""

    max_retries: int
    base_delay_s: float
    backoff_factor: float = 2.0
    jitter: bool = True


DEFAULT_RETRY_CONFIGS: dict[str, RetryConfig] = {
    "rate_limit": RetryConfig(max_retries=3, base_delay_s=2.0),
    "timeout": RetryConfig(max_retries=2, base_delay_s=1.0, backoff_factor=1.0),
    "server_error": RetryConfig(max_retries=2, base_delay_s=3.0),
}


def classify_error(error: Exception) -> str:
    """Map an SDK exception onto a retry category."""
    msg = str(error).lower()
    name = type(error).__name__.lower()

    if "429" in msg or "rate" in msg or "resourceexhausted" in name or "quota" in msg:
        return "rate_limit"
    if "timeout" in name or "timeout" in msg or "deadline" in msg:
        return "timeout"
    if any(code in msg for code in ("500", "502", "503", "504")) or "unavailable" in name:
        return "server_error"
    return "unknown"


def _compute_delay(config: RetryConfig, attempt: int) -> float:
    """Delay before retry number ``attempt`` (0-based)."""
    delay = config.base_delay_s * (config.backoff_factor ** attempt)
    if config.jitter:
        delay *= 0.5 + random.random()  # noqa: S311
    return delay


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    task: str = "unknown",
    retry_configs: dict[str, RetryConfig] | None = None,
    **kwargs: Any,
) -> Any:
    """Await ``fn(*args, **kwargs)``, retrying transient failures.

    Raises:
        LLMRetryExhausted: When the error is not retryable or its budget
            is spent.
    """
    configs = DEFAULT_RETRY_CONFIGS if retry_configs is None else retry_configs
    attempts = 0

    while True:
        try:
            return await fn(*args, **kwargs)
        except Exception as e:
            error_type = classify_error(e)
            attempts += 1
            config = configs.get(error_type)

            if config is None or attempts > config.max_retries:
                raise LLMRetryExhausted(task, error_type, attempts, e) from e

            delay = _compute_delay(config, attempts - 1)
            logger.warning(
                "AI task '%s' hit %s (attempt %d/%d), retrying in %.1fs",
                task, error_type, attempts, config.max_retries, delay,
            )
            await asyncio.sleep(delay)
