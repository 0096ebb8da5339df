# src/llm/client_factory.py — v3
"""Factory: instantiate an LLM client from a provider name.

Adapters are registered by class path and imported lazily, so an
unconfigured provider SDK never has to be installed.
"""

from __future__ import annotations

import importlib
import logging

from careerai.config.settings import Settings
from careerai.llm.base_client import BaseLLMClient
from careerai.llm.config import resolve_llm

logger = logging.getLogger(__name__)

# Registry of provider name -> adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "google": "careerai.llm.adapters.google_adapter.GoogleAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseLLMClient:
    """Instantiate the adapter registered for ``provider``.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    init_kwargs["model"] = model
    if settings is not None:
        init_kwargs.setdefault("max_tokens", settings.llm_max_tokens)
        init_kwargs.setdefault("temperature", settings.llm_temperature)
        if provider == "google":
            init_kwargs.setdefault("api_key", settings.google_api_key)

    logger.debug("Creating LLM client: provider=%s, model=%s", provider, model)
    return adapter_cls(**init_kwargs)


def create_task_client(task: str, settings: Settings) -> BaseLLMClient | None:
    """Client for ``task``, or None when the provider cannot be configured.

    A missing API key is a normal deployment state: the AI capability is
    simply absent and callers fall back to heuristic feedback.
    """
    assignment = resolve_llm(task, settings)
    try:
        return create_llm_client(assignment.provider, assignment.model, settings)
    except ValueError as e:
        logger.warning("AI capability unavailable for %s: %s", task, e)
        return None


def register_provider(name: str, class_path: str) -> None:
    """Register a custom adapter implementing BaseLLMClient."""
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider: %s -> %s", name, class_path)


def _import_class(class_path: str) -> type:
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
