"""Hub cluster API clients.

Resolves a hub cluster name against ``kubernetes.clusterLocatorMethods`` and
builds the two API clients the provider needs: one for custom resources
(CAPI clusters) and one for core resources (kubeconfig secrets). Both share a
single ``ApiClient`` so they always target the same hub.

No network call is made here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import structlog
from kubernetes import client, config

from shared.config import ClusterLocatorEntry, RootConfig
from shared.observability import get_logger

from ..errors import ClusterNotFoundError, ConfigurationError
from .config_resolver import as_root_config

logger = get_logger(__name__)

# User name of the generated kubeconfig; only used inside the client
KUBECONFIG_USER = "catalog-provider"


@dataclass(frozen=True)
class HubClients:
    """API clients bound to one hub cluster."""

    cluster_name: str
    custom_objects: client.CustomObjectsApi
    core: client.CoreV1Api


def get_cluster_config_by_name(
    name: str,
    root_config: RootConfig | Mapping[str, Any],
) -> ClusterLocatorEntry:
    """Find a cluster by name across all cluster locator methods.

    Raises:
        ConfigurationError: If ``kubernetes.clusterLocatorMethods`` is missing
        ClusterNotFoundError: If no locator defines the cluster
    """
    root = as_root_config(root_config)
    methods = root.kubernetes.cluster_locator_methods if root.kubernetes else None
    if methods is None:
        raise ConfigurationError(
            "Missing required config value at 'kubernetes.clusterLocatorMethods'"
        )

    for method in methods:
        for cluster in method.clusters:
            if cluster.name == name:
                return cluster

    raise ClusterNotFoundError(name)


def kubeconfig_from_entry(entry: ClusterLocatorEntry) -> dict[str, Any]:
    """Build a single-context kubeconfig for a token-authenticated cluster."""
    if not entry.url:
        raise ConfigurationError(
            f"Missing required config value 'url' for cluster {entry.name}"
        )

    cluster: dict[str, Any] = {
        "server": entry.url,
        "insecure-skip-tls-verify": entry.skip_tls_verify,
    }
    if entry.ca_data:
        cluster["certificate-authority-data"] = entry.ca_data

    return {
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [{"name": entry.name, "cluster": cluster}],
        "users": [{"name": KUBECONFIG_USER, "user": {"token": entry.service_account_token}}],
        "contexts": [
            {
                "name": entry.name,
                "context": {"cluster": entry.name, "user": KUBECONFIG_USER},
            }
        ],
        "current-context": entry.name,
    }


def new_api_client(
    entry: ClusterLocatorEntry,
    log: structlog.stdlib.BoundLogger | None = None,
) -> client.ApiClient:
    """Create an ApiClient for a cluster locator entry.

    Entries with a service account token get an explicit connection; all
    others fall back to ambient credentials (in-cluster, then kubeconfig).
    """
    log = log or logger

    if not entry.service_account_token:
        log.info("Using default kubernetes config", cluster=entry.name)
        configuration = client.Configuration()
        try:
            try:
                # Try in-cluster config first
                config.load_incluster_config(client_configuration=configuration)
            except config.ConfigException:
                # Fall back to kubeconfig
                config.load_kube_config(client_configuration=configuration)
        except (config.ConfigException, OSError) as e:
            raise ConfigurationError(
                f"No default kubernetes credentials available for cluster {entry.name}: {e}"
            ) from e
        return client.ApiClient(configuration)

    log.info("Loading kubernetes config from config file", cluster=entry.name)
    try:
        return config.new_client_from_config_dict(
            config_dict=kubeconfig_from_entry(entry),
            persist_config=False,
        )
    except (config.ConfigException, ValueError) as e:
        raise ConfigurationError(
            f"Invalid connection settings for cluster {entry.name}: {e}"
        ) from e


def build_clients(
    hub_cluster_name: str,
    root_config: RootConfig | Mapping[str, Any],
    log: structlog.stdlib.BoundLogger | None = None,
) -> HubClients:
    """Build the custom-resource and core clients for a hub cluster."""
    entry = get_cluster_config_by_name(hub_cluster_name, root_config)
    api_client = new_api_client(entry, log)
    return HubClients(
        cluster_name=hub_cluster_name,
        custom_objects=client.CustomObjectsApi(api_client),
        core=client.CoreV1Api(api_client),
    )
