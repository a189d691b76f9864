"""Provider catalog endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.insight import InsightRequestor
from core.providers.registry import (
    check_provider_available,
    get_model_catalog,
    get_providers,
)
from shared.schemas import ProviderStatus, ProvidersResponse

from .analysis import get_requestor

router = APIRouter()


@router.get("/providers", response_model=ProvidersResponse)
async def list_providers(requestor: InsightRequestor = Depends(get_requestor)):
    """List insight providers, their models, and whether each is usable."""
    statuses = []
    for p in get_providers():
        reason = check_provider_available(p["id"])
        statuses.append(ProviderStatus(
            id=p["id"],
            label=p["label"],
            available=reason is None,
            reason=reason,
        ))
    return ProvidersResponse(
        active_provider=requestor.provider.provider_name,
        active_model=requestor.model,
        providers=statuses,
        models=get_model_catalog(),
    )
