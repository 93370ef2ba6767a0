"""Provider endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from ..schemas.provider import ProviderSummary, RefreshOutcome

router = APIRouter()


def find_provider(request: Request, provider_id: str):
    for provider in request.app.state.providers:
        if provider.config.id == provider_id:
            return provider
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "PROVIDER_NOT_FOUND", "message": f"Provider {provider_id} not found"},
    )


@router.get(
    "/providers",
    response_model=list[ProviderSummary],
    summary="List providers",
    description="Configured CAPI providers and the outcome of their last refresh.",
)
async def list_providers(request: Request):
    return [provider.summary() for provider in request.app.state.providers]


@router.post(
    "/providers/{provider_id}/refresh",
    response_model=RefreshOutcome,
    summary="Refresh a provider now",
    description="Run one supervised refresh outside the schedule.",
)
async def refresh_provider(request: Request, provider_id: str):
    """Trigger an immediate refresh.

    The refresh is supervised exactly like a scheduled run: failures are
    reported in the outcome, not as an HTTP error.
    """
    provider = find_provider(request, provider_id)
    if not provider.connected:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "PROVIDER_NOT_CONNECTED", "message": f"Provider {provider_id} is not connected"},
        )
    return await provider.run_scheduled_refresh()
