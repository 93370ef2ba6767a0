"""Kubeconfig secret resolution for discovered clusters.

CAPI writes the admin kubeconfig of every workload cluster to a secret named
``<cluster>-kubeconfig`` in the cluster's namespace. The kubeconfig is
base64 encoded under the ``value`` key.

A missing secret, a secret of the wrong type and an undecodable payload all
resolve to ``None``: the cluster is still projected, just without API server
annotations.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
from typing import Any

import structlog
import yaml
from kubernetes import client

from shared.models import ClusterCredentials, RemoteCluster
from shared.observability import get_logger

logger = get_logger(__name__)

CAPI_CLUSTER_SECRET_TYPE = "cluster.x-k8s.io/secret"
KUBECONFIG_SECRET_SUFFIX = "-kubeconfig"
KUBECONFIG_SECRET_KEY = "value"
DEFAULT_NAMESPACE = "default"


class KubeConfigDecodeError(ValueError):
    """Raised when a kubeconfig secret payload cannot be decoded."""

    pass


def kubeconfig_secret_name(cluster_name: str) -> str:
    return f"{cluster_name}{KUBECONFIG_SECRET_SUFFIX}"


def decode_kubeconfig(encoded: str) -> ClusterCredentials:
    """Decode a base64 kubeconfig document into API server credentials.

    Uses the first cluster entry of the document.

    Raises:
        KubeConfigDecodeError: If the payload is not base64, not YAML, or has
            no cluster with a server
    """
    try:
        document = yaml.safe_load(base64.b64decode(encoded, validate=True))
    except (binascii.Error, ValueError, yaml.YAMLError) as e:
        raise KubeConfigDecodeError(f"Invalid kubeconfig payload: {e}") from e

    if not isinstance(document, dict):
        raise KubeConfigDecodeError("Kubeconfig payload is not a mapping")

    clusters: Any = document.get("clusters") or []
    if not isinstance(clusters, list) or not clusters:
        raise KubeConfigDecodeError("Kubeconfig has no clusters")

    cluster = (clusters[0] or {}).get("cluster") or {}
    server = cluster.get("server")
    if not server:
        raise KubeConfigDecodeError("Kubeconfig cluster has no server")

    return ClusterCredentials(
        server=server,
        ca_data=cluster.get("certificate-authority-data"),
    )


def credentials_from_secret(
    secret: client.V1Secret,
    log: structlog.stdlib.BoundLogger | None = None,
) -> ClusterCredentials | None:
    """Extract credentials from a kubeconfig secret, or None if unusable."""
    log = log or logger
    name = secret.metadata.name if secret.metadata else None

    if secret.type != CAPI_CLUSTER_SECRET_TYPE:
        log.info("Ignoring secret of unexpected type", secret=name, secret_type=secret.type)
        return None

    encoded = (secret.data or {}).get(KUBECONFIG_SECRET_KEY)
    if not encoded:
        log.info("Kubeconfig secret has no value", secret=name)
        return None

    try:
        return decode_kubeconfig(encoded)
    except KubeConfigDecodeError as e:
        log.info("Failed to decode kubeconfig secret", secret=name, error=str(e))
        return None


async def resolve_credentials(
    core: client.CoreV1Api,
    namespace: str | None,
    cluster_name: str,
    log: structlog.stdlib.BoundLogger | None = None,
) -> ClusterCredentials | None:
    """Fetch and decode the kubeconfig secret of one cluster.

    Never raises: any failure yields None.
    """
    log = log or logger
    namespace = namespace or DEFAULT_NAMESPACE
    secret_name = kubeconfig_secret_name(cluster_name)

    log.info("Getting KubeConfig Secret", cluster=f"{namespace}/{cluster_name}")
    try:
        secret = await asyncio.to_thread(core.read_namespaced_secret, secret_name, namespace)
        return credentials_from_secret(secret, log)
    except Exception as e:
        log.debug(
            "KubeConfig Secret unavailable",
            secret=secret_name,
            namespace=namespace,
            error=str(e),
        )
        return None


async def resolve_all_credentials(
    core: client.CoreV1Api,
    clusters: list[RemoteCluster],
    log: structlog.stdlib.BoundLogger | None = None,
) -> dict[str, ClusterCredentials | None]:
    """Resolve credentials for every cluster concurrently.

    Each lookup returns its own ``(key, credentials)`` pair; the map is
    assembled once all lookups have completed.
    """

    async def lookup(cluster: RemoteCluster) -> tuple[str, ClusterCredentials | None]:
        credentials = await resolve_credentials(core, cluster.namespace, cluster.name, log)
        return cluster.key, credentials

    results = await asyncio.gather(
        *(lookup(cluster) for cluster in clusters),
        return_exceptions=True,
    )

    resolved: dict[str, ClusterCredentials | None] = {}
    for cluster, result in zip(clusters, results):
        if isinstance(result, BaseException):
            (log or logger).info(
                "Credential lookup failed", cluster=cluster.key, error=str(result)
            )
            resolved[cluster.key] = None
        else:
            key, credentials = result
            resolved[key] = credentials
    return resolved
