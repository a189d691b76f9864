"""LLM Provider abstraction layer.

Supports multiple text-generation backends (Google Gemini, Anthropic Claude,
OpenAI) with a unified async interface, audit logging, and an output guard.
"""

from .base import LLMProvider, LLMResponse, LLMConfig, LLMError, LLMResponseError
from .google_provider import GoogleProvider
from .guards import InsightTextGuard
from .audit import AuditLogger, AuditRecord
from .registry import get_provider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMConfig",
    "LLMError",
    "LLMResponseError",
    "GoogleProvider",
    "InsightTextGuard",
    "AuditLogger",
    "AuditRecord",
    "get_provider",
]
