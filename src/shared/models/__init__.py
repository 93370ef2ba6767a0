"""Shared data models for the CAPI catalog provider.

All models follow these conventions:
- Field names: lowercase snake_case, camelCase wire aliases
- Optional values that were not resolved are omitted on the wire
"""

# Base
from .base import CatalogBaseModel

# Cluster API domain
from .capi import (
    ANNOTATION_CAPI_CLUSTER_DESCRIPTION,
    ANNOTATION_CAPI_CLUSTER_LIFECYCLE,
    ANNOTATION_CAPI_CLUSTER_OWNER,
    ANNOTATION_CAPI_CLUSTER_SYSTEM,
    ANNOTATION_CAPI_CLUSTER_TAGS,
    CAPI_CLUSTERS_PLURAL,
    CAPI_GROUP,
    CAPI_VERSION,
    ClusterAnnotations,
    ClusterCredentials,
    ObjectMeta,
    ObjectReference,
    RemoteCluster,
    RemoteClusterSpec,
    RemoteClusterStatus,
)

# Catalog domain
from .catalog import (
    ANNOTATION_CAPI_PROVIDER,
    ANNOTATION_KUBERNETES_API_SERVER,
    ANNOTATION_KUBERNETES_API_SERVER_CA,
    ANNOTATION_KUBERNETES_AUTH_PROVIDER,
    ANNOTATION_LOCATION,
    ANNOTATION_ORIGIN_LOCATION,
    KUBERNETES_CLUSTER_TYPE,
    CatalogEntity,
    ClusterStatusSummary,
    DeferredEntity,
    EntityMetadata,
    EntityMutation,
    ResourceSpec,
)

# Common types
from .common import ErrorResponse

# Provider configuration
from .provider import (
    ProviderConfig,
    ProviderDefaults,
    ProviderSchedule,
    parse_duration,
)

__all__ = [
    # Base
    "CatalogBaseModel",
    # Cluster API
    "CAPI_GROUP",
    "CAPI_VERSION",
    "CAPI_CLUSTERS_PLURAL",
    "ANNOTATION_CAPI_CLUSTER_LIFECYCLE",
    "ANNOTATION_CAPI_CLUSTER_OWNER",
    "ANNOTATION_CAPI_CLUSTER_DESCRIPTION",
    "ANNOTATION_CAPI_CLUSTER_SYSTEM",
    "ANNOTATION_CAPI_CLUSTER_TAGS",
    "ObjectMeta",
    "ObjectReference",
    "RemoteCluster",
    "RemoteClusterSpec",
    "RemoteClusterStatus",
    "ClusterAnnotations",
    "ClusterCredentials",
    # Catalog
    "ANNOTATION_LOCATION",
    "ANNOTATION_ORIGIN_LOCATION",
    "ANNOTATION_CAPI_PROVIDER",
    "ANNOTATION_KUBERNETES_API_SERVER",
    "ANNOTATION_KUBERNETES_API_SERVER_CA",
    "ANNOTATION_KUBERNETES_AUTH_PROVIDER",
    "KUBERNETES_CLUSTER_TYPE",
    "CatalogEntity",
    "EntityMetadata",
    "ResourceSpec",
    "DeferredEntity",
    "EntityMutation",
    "ClusterStatusSummary",
    # Common
    "ErrorResponse",
    # Provider
    "ProviderConfig",
    "ProviderDefaults",
    "ProviderSchedule",
    "parse_duration",
]
