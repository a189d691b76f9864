"""LLM Provider interface: abstract base for all text-generation backends.

Every provider implements a single coroutine, ``generate_text``. The insight
requestor receives a provider via dependency injection, making it trivial to
swap Gemini ↔ Claude ↔ OpenAI (or a fake in tests).
"""

from __future__ import annotations

import abc
import hashlib
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LLMConfig:
    """Immutable configuration for a single LLM call."""

    model: str = ""
    temperature: float = 0.7
    max_tokens: int = 400


@dataclass
class LLMResponse:
    """Standardised response from any LLM provider."""

    text: Optional[str]
    model: str = ""
    provider: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    stop_reason: str = ""
    prompt_hash: str = ""
    result_hash: str = ""


class LLMProvider(abc.ABC):
    """Abstract base class for LLM providers.

    Subclasses must implement ``generate_text``: send one prompt, await one
    response. There is no retry loop at this layer.
    """

    provider_name: str = "base"
    default_model: str = ""

    @abc.abstractmethod
    async def generate_text(
        self,
        prompt: str,
        *,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """Send a prompt and return the generated text.

        Parameters
        ----------
        prompt : str
            Full natural-language prompt.
        config : LLMConfig, optional
            Override default config for this call.

        Returns
        -------
        LLMResponse
            ``text`` may be ``None`` or empty when the service returned no
            candidate text.

        Raises
        ------
        LLMError
            On missing credentials, missing SDK, or API failure.
        """
        ...

    def _default_config(self, config: Optional[LLMConfig]) -> LLMConfig:
        return config or LLMConfig()

    def _resolve_model(self, cfg: LLMConfig) -> str:
        return cfg.model or self.default_model


def short_hash(text: str) -> str:
    """16-hex-digit sha256 prefix used for prompt/result audit hashes."""
    return hashlib.sha256(text.encode()).hexdigest()[:16]


class LLMError(Exception):
    """Base exception for LLM provider errors."""

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message)
        self.provider = provider


class LLMResponseError(LLMError):
    """LLM returned a response that could not be read (blocked, malformed)."""

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message, provider=provider)
