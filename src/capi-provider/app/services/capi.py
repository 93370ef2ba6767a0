"""CAPI cluster discovery on a hub cluster."""

from __future__ import annotations

import asyncio
import time

import structlog
from kubernetes import client

from shared.models import CAPI_CLUSTERS_PLURAL, CAPI_GROUP, CAPI_VERSION, RemoteCluster
from shared.observability import get_logger, log_external_call_end, log_external_call_start

logger = get_logger(__name__)


async def list_clusters(
    custom_objects: client.CustomObjectsApi,
    log: structlog.stdlib.BoundLogger | None = None,
) -> list[RemoteCluster]:
    """List every CAPI ``Cluster`` object visible on the hub.

    One list call, no retry. API and transport errors propagate unchanged;
    the next scheduled run is the retry.
    """
    log = log or logger
    log_external_call_start(log, "kubernetes", "list_clusters")
    started = time.monotonic()

    try:
        response = await asyncio.to_thread(
            custom_objects.list_cluster_custom_object,
            CAPI_GROUP,
            CAPI_VERSION,
            CAPI_CLUSTERS_PLURAL,
        )
    except Exception as e:
        log_external_call_end(
            log,
            "kubernetes",
            "list_clusters",
            success=False,
            duration_ms=(time.monotonic() - started) * 1000,
            error=str(e),
        )
        raise

    log_external_call_end(
        log,
        "kubernetes",
        "list_clusters",
        success=True,
        duration_ms=(time.monotonic() - started) * 1000,
    )

    items = (response or {}).get("items") or []
    return [RemoteCluster.model_validate(item) for item in items]
