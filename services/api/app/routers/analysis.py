"""Analysis endpoint: one full submission per request.

Each request gets its own ``AnalysisSession``; the insight requestor (and its
audit log) is shared by the whole process.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException

from core.analysis import InputValidationError
from core.insight import InsightRequestor
from core.session import AnalysisSession
from shared.schemas import (
    AnalysisResultOut,
    AnalyzeRequest,
    AnalyzeResponse,
    DisplayFields,
    ValidationErrorDetail,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@lru_cache(maxsize=1)
def get_requestor() -> InsightRequestor:
    """Process-wide insight requestor built from settings."""
    return InsightRequestor.from_settings()


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={422: {"model": ValidationErrorDetail}},
)
async def analyze_numbers(
    body: AnalyzeRequest,
    requestor: InsightRequestor = Depends(get_requestor),
):
    """Validate, analyze, and (optionally) fetch insight for three numbers."""
    session = AnalysisSession(requestor)
    try:
        result = await session.submit(
            body.target,
            body.bound_alpha,
            body.bound_omega,
            include_insight=body.include_insight,
        )
    except InputValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=ValidationErrorDetail(message=exc.message, fields=exc.fields).model_dump(),
        )

    return AnalyzeResponse(
        result=AnalysisResultOut(**result.to_dict()),
        display=DisplayFields(
            containment_label=result.containment_label,
            display_progress=result.display_progress,
            progress_text=result.progress_text,
            number_kind=result.number_kind,
        ),
        provider=requestor.provider.provider_name if body.include_insight else None,
        model=requestor.model if body.include_insight else None,
    )
