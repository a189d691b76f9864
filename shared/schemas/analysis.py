"""Analysis request/response schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

RawNumber = Union[str, int, float]


class AnalyzeRequest(BaseModel):
    """Raw form values; parsing happens server-side so text and numbers both work."""

    target: RawNumber = Field(..., description="Target value, e.g. '3.1415'")
    bound_alpha: RawNumber = Field(..., description="First integer bound")
    bound_omega: RawNumber = Field(..., description="Second integer bound (either order)")
    include_insight: bool = Field(
        default=True,
        description="Request LLM commentary; false returns the numeric analysis only",
    )


class AnalysisResultOut(BaseModel):
    """Containment status and derived statistics."""

    target: float
    bound_low: int
    bound_high: int
    is_contained: bool
    progress_percent: float = Field(
        ..., description="Position within the bounds in percent; unclamped",
    )
    range: int
    is_integer_valued: bool
    insight_text: str = ""


class DisplayFields(BaseModel):
    """Presentation-ready values derived from the result."""

    containment_label: str
    display_progress: float = Field(..., description="progress_percent clamped to [0, 100]")
    progress_text: str
    number_kind: str


class AnalyzeResponse(BaseModel):
    """Response from a full submission."""

    result: AnalysisResultOut
    display: DisplayFields
    provider: Optional[str] = None
    model: Optional[str] = None


class ValidationErrorDetail(BaseModel):
    """Body of a 422 returned for unparseable input."""

    code: str = "INVALID_INPUT"
    message: str
    fields: List[str] = Field(default_factory=list)


class ProviderStatus(BaseModel):
    id: str
    label: str
    available: bool
    reason: Optional[str] = None


class ProvidersResponse(BaseModel):
    active_provider: str
    active_model: str
    providers: List[ProviderStatus] = Field(default_factory=list)
    models: List[Dict[str, Any]] = Field(default_factory=list)
