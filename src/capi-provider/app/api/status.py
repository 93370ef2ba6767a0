"""Cluster status endpoint.

Lists the lifecycle phase of every CAPI cluster on every configured hub,
queried live from the hubs.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError as TransportError

from shared.models import ClusterStatusSummary
from shared.observability import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/status",
    response_model=list[ClusterStatusSummary],
    summary="List CAPI cluster status",
    description="Phase and readiness of every CAPI cluster discovered on the hub clusters.",
)
async def list_cluster_status(request: Request):
    """List all clusters with their lifecycle status."""
    logger.debug("Listing all clusters")

    results: list[ClusterStatusSummary] = []
    for provider in request.app.state.providers:
        try:
            results.extend(await provider.list_cluster_statuses())
        except (ApiException, TransportError) as e:
            logger.error(
                "Failed to list CAPI clusters",
                provider=provider.get_provider_name(),
                error=str(e),
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={
                    "error": "HUB_CLUSTER_UNAVAILABLE",
                    "message": f"Failed to list clusters on {provider.config.hub_cluster_name}",
                },
            )

    return results
