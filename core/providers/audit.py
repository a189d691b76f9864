"""LLM audit logging: one record per insight call, success or failure.

Records are kept in memory; an optional ``persist_fn`` can ship them
elsewhere. This is a diagnostic side channel and never affects the value
returned to the user.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .base import LLMResponse

logger = logging.getLogger(__name__)


@dataclass
class AuditRecord:
    """Single LLM call audit entry."""

    provider: str = ""
    model: str = ""
    prompt_hash: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    result_hash: str = ""
    used_fallback: bool = False
    timestamp: float = field(default_factory=time.time)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AuditLogger:
    """Collects LLM audit records.

    Usage::

        audit = AuditLogger()
        audit.log(response)
        audit.log_failure(provider="google", model="gemini-2.0-flash",
                          prompt_hash="...", error="timeout")
        audit.summary()
    """

    def __init__(self, persist_fn: Optional[Callable[[AuditRecord], None]] = None):
        self._records: List[AuditRecord] = []
        self._persist_fn = persist_fn

    def _append(self, record: AuditRecord) -> AuditRecord:
        self._records.append(record)
        if self._persist_fn:
            try:
                self._persist_fn(record)
            except Exception as e:
                logger.error("Failed to persist audit record: %s", e)
        return record

    def log(self, response: LLMResponse, *, used_fallback: bool = False) -> AuditRecord:
        """Record a completed LLM call."""
        record = self._append(AuditRecord(
            provider=response.provider,
            model=response.model,
            prompt_hash=response.prompt_hash,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            latency_ms=response.latency_ms,
            result_hash=response.result_hash,
            used_fallback=used_fallback,
        ))
        logger.info(
            "LLM audit: provider=%s model=%s tokens=%d+%d latency=%dms fallback=%s",
            record.provider,
            record.model,
            record.input_tokens,
            record.output_tokens,
            record.latency_ms,
            record.used_fallback,
        )
        return record

    def log_failure(
        self,
        *,
        provider: str,
        model: str,
        prompt_hash: str,
        error: str,
        latency_ms: int = 0,
    ) -> AuditRecord:
        """Record a call that raised before producing a response."""
        record = self._append(AuditRecord(
            provider=provider,
            model=model,
            prompt_hash=prompt_hash,
            latency_ms=latency_ms,
            used_fallback=True,
            error=error,
        ))
        logger.info(
            "LLM audit: provider=%s model=%s failed after %dms: %s",
            provider, model, latency_ms, error,
        )
        return record

    def summary(self) -> Dict[str, Any]:
        """Return aggregate stats for all recorded calls."""
        return {
            "total_calls": len(self._records),
            "total_input_tokens": sum(r.input_tokens for r in self._records),
            "total_output_tokens": sum(r.output_tokens for r in self._records),
            "total_latency_ms": sum(r.latency_ms for r in self._records),
            "errors": sum(1 for r in self._records if r.error),
            "fallbacks": sum(1 for r in self._records if r.used_fallback),
        }

    @property
    def records(self) -> List[AuditRecord]:
        return list(self._records)
