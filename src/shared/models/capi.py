"""Cluster API domain models.

Models for the ``cluster.x-k8s.io/v1beta1`` ``Cluster`` custom resource as
returned by the Kubernetes API, plus the credentials decoded from a
cluster's kubeconfig secret.
"""

from typing import Any

from pydantic import Field, field_validator

from .base import CatalogBaseModel

CAPI_GROUP = "cluster.x-k8s.io"
CAPI_VERSION = "v1beta1"
CAPI_CLUSTERS_PLURAL = "clusters"

# Annotations read off CAPI clusters
ANNOTATION_CAPI_CLUSTER_LIFECYCLE = "cluster.x-k8s.io/cluster-lifecycle"
ANNOTATION_CAPI_CLUSTER_OWNER = "cluster.x-k8s.io/cluster-owner"
ANNOTATION_CAPI_CLUSTER_DESCRIPTION = "cluster.x-k8s.io/cluster-description"
ANNOTATION_CAPI_CLUSTER_SYSTEM = "cluster.x-k8s.io/cluster-system"
ANNOTATION_CAPI_CLUSTER_TAGS = "cluster.x-k8s.io/cluster-tags"


class ObjectReference(CatalogBaseModel):
    """Reference to another object. Kind may be omitted."""

    kind: str | None = None
    name: str | None = None
    namespace: str | None = None
    api_version: str | None = Field(default=None, alias="apiVersion")


class ObjectMeta(CatalogBaseModel):
    name: str = ""
    namespace: str | None = None
    annotations: dict[str, str] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("annotations", "labels", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class RemoteClusterSpec(CatalogBaseModel):
    paused: bool = False
    control_plane_ref: ObjectReference | None = Field(default=None, alias="controlPlaneRef")
    infrastructure_ref: ObjectReference | None = Field(default=None, alias="infrastructureRef")


class RemoteClusterStatus(CatalogBaseModel):
    phase: str | None = None
    control_plane_ready: bool = Field(default=False, alias="controlPlaneReady")
    infrastructure_ready: bool = Field(default=False, alias="infrastructureReady")


class RemoteCluster(CatalogBaseModel):
    """A CAPI ``Cluster`` object discovered on a hub cluster."""

    api_version: str = Field(default=f"{CAPI_GROUP}/{CAPI_VERSION}", alias="apiVersion")
    kind: str = "Cluster"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: RemoteClusterSpec = Field(default_factory=RemoteClusterSpec)
    status: RemoteClusterStatus | None = None

    @field_validator("metadata", "spec", mode="before")
    @classmethod
    def none_as_default(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str | None:
        return self.metadata.namespace

    @property
    def key(self) -> str:
        """``namespace/name`` identity within one hub."""
        return f"{self.metadata.namespace or ''}/{self.metadata.name}"


class ClusterAnnotations(CatalogBaseModel):
    """Catalog fields extracted from a cluster's annotations."""

    lifecycle: str | None = None
    owner: str | None = None
    description: str | None = None
    system: str | None = None
    tags: list[str] | None = None


class ClusterCredentials(CatalogBaseModel):
    """API server connection details decoded from a kubeconfig secret."""

    server: str
    ca_data: str | None = None
