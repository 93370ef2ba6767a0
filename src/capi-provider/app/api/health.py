"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get(
    "/health",
    summary="Health check",
    description="Basic health check endpoint.",
)
async def health():
    """Basic health check."""
    return {"status": "healthy", "service": "capi-catalog-provider"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if every provider is connected to the catalog.",
)
async def ready(request: Request):
    """Readiness check.

    Ready once all configured providers are bound to their catalog
    connection and their refresh tasks are scheduled.
    """
    providers = getattr(request.app.state, "providers", None)
    checks = {
        "providers_loaded": providers is not None,
        "providers_connected": bool(providers is not None and all(p.connected for p in providers)),
    }

    all_ready = all(checks.values())

    return {
        "status": "ready" if all_ready else "not_ready",
        "checks": checks,
    }
