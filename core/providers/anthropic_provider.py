"""Anthropic Claude provider implementation."""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from .base import LLMConfig, LLMError, LLMProvider, LLMResponse, short_hash

logger = logging.getLogger(__name__)


class AnthropicProvider(LLMProvider):
    """LLM Provider backed by Anthropic Claude API."""

    provider_name = "anthropic"

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "claude-haiku-4-5-20251001",
        base_url: Optional[str] = None,
    ):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY", "")
        self.default_model = default_model
        self.base_url = base_url
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise LLMError(
                    "ANTHROPIC_API_KEY is not set",
                    provider=self.provider_name,
                )
            try:
                from anthropic import AsyncAnthropic

                kwargs: Dict[str, Any] = {"api_key": self.api_key}
                if self.base_url:
                    kwargs["base_url"] = self.base_url
                self._client = AsyncAnthropic(**kwargs)
            except ImportError:
                raise LLMError(
                    "anthropic package required: pip install anthropic",
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
        response = await self.client.messages.create(
            model=model,
            max_tokens=cfg.max_tokens,
            temperature=cfg.temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        latency_ms = int((time.time() - t0) * 1000)

        # Concatenate text blocks; other block types are ignored
        parts = [
            getattr(block, "text", "")
            for block in (response.content or [])
            if getattr(block, "type", "text") == "text"
        ]
        text = "".join(parts) if parts else None

        usage = getattr(response, "usage", None)
        return LLMResponse(
            text=text,
            model=model,
            provider=self.provider_name,
            input_tokens=getattr(usage, "input_tokens", 0) if usage else 0,
            output_tokens=getattr(usage, "output_tokens", 0) if usage else 0,
            latency_ms=latency_ms,
            stop_reason=getattr(response, "stop_reason", "") or "",
            prompt_hash=short_hash(prompt),
            result_hash=short_hash(text or ""),
        )
