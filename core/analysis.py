"""Numeric analysis of a target value against two integer bounds.

Everything here is pure: the same inputs always yield an identical
``AnalysisResult``. Parsing of the raw form text lives next to the analysis
so both UI shells (Streamlit and the HTTP API) reject bad input the same way.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, NamedTuple, Tuple

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please ensure all inputs are valid numbers."

# Bounds are 64-bit integers
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

CONTAINED_LABEL = "INTERNALIZED"
NOT_CONTAINED_LABEL = "EXTERNALIZED"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class InputValidationError(ValueError):
    """One or more raw inputs could not be parsed as a number."""

    def __init__(self, fields: List[str], message: str = VALIDATION_MESSAGE):
        super().__init__(message)
        self.fields = list(fields)
        self.message = message


# ---------------------------------------------------------------------------
# Result record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalysisResult:
    """Containment status and derived statistics for one submission."""

    target: float
    bound_low: int
    bound_high: int
    is_contained: bool
    progress_percent: float
    range: int
    is_integer_valued: bool
    insight_text: str = ""

    @property
    def display_progress(self) -> float:
        """Progress clamped to [0, 100] for drawing a bar."""
        return max(0.0, min(100.0, self.progress_percent))

    @property
    def progress_text(self) -> str:
        """``progress_percent`` with exactly two decimals, e.g. ``"-783.28"``."""
        return f"{self.progress_percent:.2f}"

    @property
    def containment_label(self) -> str:
        return CONTAINED_LABEL if self.is_contained else NOT_CONTAINED_LABEL

    @property
    def number_kind(self) -> str:
        return "Integer" if self.is_integer_valued else "Rational"

    def with_insight(self, text: str) -> "AnalysisResult":
        return replace(self, insight_text=text)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ParsedInputs(NamedTuple):
    target: float
    alpha: int
    omega: int


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_float(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw if raw is not None else "").strip()
        if not text:
            raise ValueError("empty input")
        value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value: {raw!r}")
    return value


def _parse_int(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw if raw is not None else "").strip()
        try:
            value = int(text)
        except ValueError:
            # "12.9" -> 12, like integer parsing of a number field
            value = math.trunc(_parse_float(text))
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"bound outside the 64-bit integer range: {raw!r}")
    return value


def parse_inputs(raw_target: Any, raw_alpha: Any, raw_omega: Any) -> ParsedInputs:
    """Parse the three raw form values.

    Raises
    ------
    InputValidationError
        If any of the three values is not a finite number. All three are
        checked so the error names every offending field.
    """
    failed: List[str] = []
    parsers: Tuple[Tuple[str, Any, Any], ...] = (
        ("target", raw_target, _parse_float),
        ("bound_alpha", raw_alpha, _parse_int),
        ("bound_omega", raw_omega, _parse_int),
    )
    values = []
    for name, raw, parser in parsers:
        try:
            values.append(parser(raw))
        except (TypeError, ValueError, OverflowError):
            failed.append(name)
            values.append(None)

    if not failed:
        target, alpha, omega = values
        # A finite target can still sit so far outside a narrow range that
        # its position overflows a float
        if not math.isfinite(_raw_percent(target, min(alpha, omega), max(alpha, omega))):
            failed.append("target")

    if failed:
        logger.info("Rejected input: unparseable fields %s", ", ".join(failed))
        raise InputValidationError(failed)

    return ParsedInputs(*values)


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------

_CENTS = Decimal("0.01")


def _raw_percent(target: float, low: int, high: int) -> float:
    if high == low:
        return 0.0
    return (target - low) / (high - low) * 100


def _round_percent(value: float) -> float:
    """Round to two decimals, ties away from zero.

    The exact binary value is rounded, so 1/800 of the way through a range
    (exactly 0.125) gives 0.13 and its mirror gives -0.13. Magnitudes of
    1e21 and above have no fractional digits left and pass through.
    """
    if not math.isfinite(value) or abs(value) >= 1e21:
        return value
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def analyze(target: float, a: int, b: int) -> AnalysisResult:
    """Compute containment and statistics of ``target`` within ``[a, b]``.

    Bounds may be given in either order. ``progress_percent`` is rounded to
    two decimals but left unclamped: a target below the range yields a
    negative percentage, one above it more than 100.
    """
    low = min(a, b)
    high = max(a, b)
    target = float(target)

    progress = _round_percent(_raw_percent(target, low, high))

    return AnalysisResult(
        target=target,
        bound_low=low,
        bound_high=high,
        is_contained=low <= target <= high,
        progress_percent=progress,
        range=high - low,
        is_integer_valued=target.is_integer(),
    )


def analyze_raw(raw_target: Any, raw_alpha: Any, raw_omega: Any) -> AnalysisResult:
    """Parse the raw form values, then analyze them."""
    parsed = parse_inputs(raw_target, raw_alpha, raw_omega)
    return analyze(parsed.target, parsed.alpha, parsed.omega)
