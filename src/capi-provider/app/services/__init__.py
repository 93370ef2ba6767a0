"""Provider services."""

from .capi import list_clusters
from .catalog import (
    CatalogBackend,
    EntityProviderConnection,
    HttpCatalog,
    HttpCatalogConnection,
    InMemoryCatalog,
    InMemoryCatalogConnection,
)
from .config_resolver import read_provider_config, read_provider_configs
from .entity_mapper import cluster_status_summary, map_cluster_entity
from .kube_clients import HubClients, build_clients, get_cluster_config_by_name
from .kubeconfig import (
    KubeConfigDecodeError,
    decode_kubeconfig,
    resolve_all_credentials,
    resolve_credentials,
)
from .provider import CAPIClusterProvider
from .scheduler import (
    AsyncioTaskScheduler,
    ScheduledTaskRunner,
    TaskInvocation,
    TaskRunner,
    TaskScheduler,
)

__all__ = [
    "AsyncioTaskScheduler",
    "CAPIClusterProvider",
    "CatalogBackend",
    "EntityProviderConnection",
    "HttpCatalog",
    "HttpCatalogConnection",
    "HubClients",
    "InMemoryCatalog",
    "InMemoryCatalogConnection",
    "KubeConfigDecodeError",
    "ScheduledTaskRunner",
    "TaskInvocation",
    "TaskRunner",
    "TaskScheduler",
    "build_clients",
    "cluster_status_summary",
    "decode_kubeconfig",
    "get_cluster_config_by_name",
    "list_clusters",
    "map_cluster_entity",
    "read_provider_config",
    "read_provider_configs",
    "resolve_all_credentials",
    "resolve_credentials",
]
