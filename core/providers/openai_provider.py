"""OpenAI provider implementation.

Implements the same LLMProvider interface as GoogleProvider.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Optional

from .base import LLMConfig, LLMError, LLMProvider, LLMResponse, LLMResponseError, short_hash

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """LLM Provider backed by OpenAI API (GPT-4o, etc.).

    To activate:
    1. pip install openai
    2. Set OPENAI_API_KEY environment variable
    """

    provider_name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "gpt-4o-mini",
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY", "")
        self.default_model = default_model
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise LLMError("OPENAI_API_KEY is not set", provider=self.provider_name)
            try:
                from openai import AsyncOpenAI
                self._client = AsyncOpenAI(api_key=self.api_key)
            except ImportError:
                raise LLMError(
                    "openai package required: pip install openai",
                    provider=self.provider_name,
                )
        return self._client

    async def generate_text(
        self,
        prompt: str,
        *,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        cfg = self._default_config(config)
        model = self._resolve_model(cfg)

        t0 = time.time()
        response = await self.client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=cfg.temperature,
            max_tokens=cfg.max_tokens,
        )
        latency_ms = int((time.time() - t0) * 1000)

        if not response.choices:
            raise LLMResponseError("OpenAI response has no choices", provider=self.provider_name)

        choice = response.choices[0]
        text = choice.message.content if choice.message else None

        return LLMResponse(
            text=text,
            model=model,
            provider=self.provider_name,
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
            latency_ms=latency_ms,
            stop_reason=choice.finish_reason or "",
            prompt_hash=short_hash(prompt),
            result_hash=short_hash(text or ""),
        )
