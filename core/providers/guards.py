"""Output guard for free-text LLM responses.

Insight text is shown verbatim, so the guard only removes what a model
tends to wrap around a paragraph: surrounding whitespace and a markdown
code fence.
"""

from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class InsightTextGuard:
    """Normalise raw LLM text into displayable insight text."""

    @staticmethod
    def normalize(raw_text: Optional[str]) -> Optional[str]:
        """Return stripped text, or ``None`` when nothing usable is left."""
        if raw_text is None:
            return None
        text = raw_text.strip()

        # Strip markdown code block wrapper
        if text.startswith("```"):
            first_nl = text.find("\n")
            text = text[first_nl + 1:] if first_nl > 0 else ""
            if text.rstrip().endswith("```"):
                text = text.rstrip()[:-3]
            text = text.strip()
            logger.debug("Stripped code fence from insight text")

        return text or None
