# src/llm/config.py — v2
"""Per-task LLM routing.

Resolution order:
  1. Per-task env var (LLM_ANALYSIS=google:gemini-1.5-pro)
  2. Default provider + model (LLM_DEFAULT_PROVIDER + LLM_DEFAULT_MODEL)
  3. Hardcoded fallback (google:gemini-2.0-flash-001)
"""

from __future__ import annotations

from dataclasses import dataclass

from careerai.config.settings import Settings

TASKS: tuple[str, ...] = ("analysis", "rewrite", "job_match")

_FALLBACK_PROVIDER = "google"
_FALLBACK_MODEL = "gemini-2.0-flash-001"


@dataclass(frozen=True)
class LLMAssignment:
    """Resolved provider:model for a task."""

    provider: str
    model: str
    source: str  # "task", "default", or "fallback"

    @property
    def key(self) -> str:
        return f"{self.provider}:{self.model}"


def _parse_assignment(value: str) -> tuple[str, str] | None:
    """Parse 'provider:model'. Returns None if empty or malformed."""
    if not value or ":" not in value:
        return None
    provider, model = value.split(":", 1)
    if not provider.strip() or not model.strip():
        return None
    return (provider.strip(), model.strip())


def resolve_llm(task: str, settings: Settings) -> LLMAssignment:
    """Resolve the provider and model used for ``task``."""
    parsed = _parse_assignment(getattr(settings, f"llm_{task}", ""))
    if parsed:
        return LLMAssignment(provider=parsed[0], model=parsed[1], source="task")

    if settings.llm_default_provider and settings.llm_default_model:
        return LLMAssignment(
            provider=settings.llm_default_provider,
            model=settings.llm_default_model,
            source="default",
        )

    return LLMAssignment(provider=_FALLBACK_PROVIDER, model=_FALLBACK_MODEL, source="fallback")


def resolve_all(settings: Settings) -> dict[str, LLMAssignment]:
    return {task: resolve_llm(task, settings) for task in TASKS}
