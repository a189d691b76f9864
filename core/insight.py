"""Insight requests: a short narrative about the numbers from an LLM.

One call per invocation, no retries. Whatever happens on the wire, the
caller always gets a string back: the model's text, or one of two fixed
fallback literals.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from .providers.audit import AuditLogger
from .providers.base import LLMConfig, LLMProvider, short_hash
from .providers.guards import InsightTextGuard
from .providers.registry import (
    get_default_model_for_provider,
    get_provider,
    validate_provider_model,
)
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

EMPTY_INSIGHT_TEXT = "No insight available."
OFFLINE_INSIGHT_TEXT = (
    "The numbers are shy today. Mathematical synergy is present, "
    "but AI insight is currently offline."
)

INSIGHT_PROMPT_TEMPLATE = (
    "Analyze these numbers: Target: {target}, Min bound: {low}, Max bound: {high}.\n"
    "Provide a short, fascinating mathematical or historical paragraph about "
    "these specific numbers.\n"
    "Focus on their relationship or individual properties. Keep it under 100 words."
)


def _format_number(value: float) -> str:
    """Render 50.0 as ``50`` and 3.1415 as ``3.1415``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def build_insight_prompt(target: float, bound_low: int, bound_high: int) -> str:
    return INSIGHT_PROMPT_TEMPLATE.format(
        target=_format_number(target),
        low=bound_low,
        high=bound_high,
    )


class InsightRequestor:
    """Ask a text-generation provider for commentary on three numbers.

    Stateless apart from the append-only audit log; safe to share between
    sessions.
    """

    def __init__(
        self,
        provider: LLMProvider,
        *,
        config: Optional[LLMConfig] = None,
        audit: Optional[AuditLogger] = None,
    ):
        self.provider = provider
        self.config = config or LLMConfig(model=provider.default_model)
        self.audit = audit or AuditLogger()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "InsightRequestor":
        settings = settings or get_settings()
        if settings.insight_model and not validate_provider_model(
            settings.insight_provider, settings.insight_model,
        ):
            logger.warning(
                "INSIGHT_MODEL %r is not in the %s catalog; using it as given",
                settings.insight_model, settings.insight_provider,
            )
        model = settings.insight_model or get_default_model_for_provider(
            settings.insight_provider
        )
        provider = get_provider(settings.insight_provider, model)
        config = LLMConfig(
            model=provider.default_model,
            temperature=settings.insight_temperature,
            max_tokens=settings.insight_max_tokens,
        )
        return cls(provider, config=config)

    @property
    def model(self) -> str:
        return self.config.model or self.provider.default_model

    async def request_insight(self, target: float, bound_low: int, bound_high: int) -> str:
        prompt = build_insight_prompt(target, bound_low, bound_high)
        t0 = time.time()
        try:
            response = await self.provider.generate_text(prompt, config=self.config)
        except Exception as exc:
            latency_ms = int((time.time() - t0) * 1000)
            logger.exception(
                "AI analysis failed (provider=%s model=%s)",
                self.provider.provider_name, self.model,
            )
            self.audit.log_failure(
                provider=self.provider.provider_name,
                model=self.model,
                prompt_hash=short_hash(prompt),
                error=f"{type(exc).__name__}: {exc}",
                latency_ms=latency_ms,
            )
            return OFFLINE_INSIGHT_TEXT

        text = InsightTextGuard.normalize(response.text)
        self.audit.log(response, used_fallback=text is None)
        return text if text is not None else EMPTY_INSIGHT_TEXT


async def request_insight(
    target: float,
    bound_low: int,
    bound_high: int,
    *,
    requestor: Optional[InsightRequestor] = None,
) -> str:
    """Module-level convenience wrapper around ``InsightRequestor``."""
    requestor = requestor or InsightRequestor.from_settings()
    return await requestor.request_insight(target, bound_low, bound_high)
