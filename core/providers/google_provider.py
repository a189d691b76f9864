"""Google Gemini provider: the default insight backend.

Uses the ``google-generativeai`` SDK's native coroutine
(``GenerativeModel.generate_content_async``) so the request suspends the
caller instead of blocking the event loop.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from .base import LLMConfig, LLMError, LLMProvider, LLMResponse, short_hash

logger = logging.getLogger(__name__)


def _read_api_key() -> str:
    # API_KEY is still honoured for older deployments
    return os.environ.get("GOOGLE_API_KEY") or os.environ.get("API_KEY", "")


class GoogleProvider(LLMProvider):
    """LLM Provider backed by Google Gemini API.

    To activate:
    1. pip install google-generativeai
    2. Set GOOGLE_API_KEY (or API_KEY) environment variable
    """

    provider_name = "google"

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "gemini-2.0-flash",
    ):
        self.api_key = api_key or _read_api_key()
        self.default_model = default_model
        self._models: Dict[str, Any] = {}

    def _model_for(self, model_id: str):
        if model_id not in self._models:
            if not self.api_key:
                raise LLMError("GOOGLE_API_KEY is not set", provider=self.provider_name)
            try:
                import google.generativeai as genai
            except ImportError:
                raise LLMError(
                    "google-generativeai package required: pip install google-generativeai",
                    provider=self.provider_name,
                )
            genai.configure(api_key=self.api_key)
            self._models[model_id] = genai.GenerativeModel(model_id)
        return self._models[model_id]

    @staticmethod
    def _extract_text(response) -> Optional[str]:
        # ``response.text`` raises ValueError when no candidate has parts
        # (e.g. a safety block); that counts as absent text, not a failure.
        try:
            return response.text
        except ValueError:
            logger.warning("Gemini response carried no text parts")
            return None

    async def generate_text(
        self,
        prompt: str,
        *,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        cfg = self._default_config(config)
        model_id = self._resolve_model(cfg)
        model = self._model_for(model_id)

        gen_config = {
            "temperature": cfg.temperature,
            "max_output_tokens": cfg.max_tokens,
        }

        t0 = time.time()
        response = await model.generate_content_async(
            prompt, generation_config=gen_config,
        )
        latency_ms = int((time.time() - t0) * 1000)

        text = self._extract_text(response)
        usage = getattr(response, "usage_metadata", None)

        return LLMResponse(
            text=text,
            model=model_id,
            provider=self.provider_name,
            input_tokens=getattr(usage, "prompt_token_count", 0) if usage else 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) if usage else 0,
            latency_ms=latency_ms,
            stop_reason="stop",
            prompt_hash=short_hash(prompt),
            result_hash=short_hash(text or ""),
        )
