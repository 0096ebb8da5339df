# src/llm/adapters/google_adapter.py — v2
"""Google Gemini adapter implementing BaseLLMClient.

Uses the google-generativeai SDK, imported lazily so the rest of the
package works without it.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from careerai.llm.base_client import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, BaseLLMClient
from careerai.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)


class GoogleAdapter(BaseLLMClient):
    """Google Gemini adapter."""

    def __init__(
        self,
        model: str = "gemini-2.0-flash-001",
        api_key: str = "",
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        **kwargs: Any,
    ):
        if not api_key:
            raise ValueError("GOOGLE_API_KEY is required for the google provider")
        self._model = model
        self._api_key = api_key
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> LLMResponse:
        import google.generativeai as genai

        max_tokens, temperature = self._generation_params(max_tokens, temperature)

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model, system_instruction=system)

        # Gemini has no system role in contents; it goes in system_instruction.
        contents = [
            {"role": "model" if m.role == "assistant" else "user", "parts": [{"text": m.content}]}
            for m in messages
            if m.role != "system"
        ]

        t0 = time.monotonic()
        resp = await model.generate_content_async(
            contents,
            generation_config={"max_output_tokens": max_tokens, "temperature": temperature},
        )
        latency = int((time.monotonic() - t0) * 1000)

        usage = getattr(resp, "usage_metadata", None)
        logger.debug("Gemini %s answered in %dms", self._model, latency)
        return LLMResponse(
            content=resp.text or "",
            input_tokens=getattr(usage, "prompt_token_count", 0) if usage else 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) if usage else 0,
            model=self._model,
            provider="google",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "google"
