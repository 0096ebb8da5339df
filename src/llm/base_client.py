# src/llm/base_client.py — v3
"""Abstract LLM client interface.

The analysis, rewrite and job-match flows only need "prompt in, text out";
``generate`` covers that on top of the provider-specific ``complete``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from careerai.llm.models import LLMResponse, Message

DEFAULT_MAX_TOKENS = 8192
DEFAULT_TEMPERATURE = 0.7


class BaseLLMClient(ABC):
    """Unified interface for all LLM providers.

    ``max_tokens`` and ``temperature`` are the client's configured
    defaults; a call passing None for either uses them.
    """

    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> LLMResponse:
        """Text completion."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (google, ...)."""

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Single-turn completion returning the raw text."""
        response = await self.complete(
            [Message(role="user", content=prompt)],
            system=system,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return response.content

    def _generation_params(
        self, max_tokens: int | None, temperature: float | None,
    ) -> tuple[int, float]:
        return (
            self.max_tokens if max_tokens is None else max_tokens,
            self.temperature if temperature is None else temperature,
        )
