"""Catalog domain models.

Entities are serialised with ``exclude_none`` so that optional fields that
were not resolved are omitted from the payload rather than sent as null.
"""

from typing import Any, Literal

from pydantic import Field

from .base import CatalogBaseModel

ENTITY_API_VERSION = "backstage.io/v1beta1"
RESOURCE_KIND = "Resource"
KUBERNETES_CLUSTER_TYPE = "kubernetes-cluster"

# Annotations written on catalog entities
ANNOTATION_LOCATION = "backstage.io/managed-by-location"
ANNOTATION_ORIGIN_LOCATION = "backstage.io/managed-by-origin-location"
ANNOTATION_CAPI_PROVIDER = "cluster.x-k8s.io/capi-provider"
ANNOTATION_KUBERNETES_API_SERVER = "kubernetes.io/api-server"
ANNOTATION_KUBERNETES_API_SERVER_CA = "kubernetes.io/api-server-certificate-authority"
ANNOTATION_KUBERNETES_AUTH_PROVIDER = "kubernetes.io/auth-provider"


class EntityMetadata(CatalogBaseModel):
    name: str
    title: str | None = None
    description: str | None = None
    annotations: dict[str, str] = Field(default_factory=dict)
    tags: list[str] | None = None


class ResourceSpec(CatalogBaseModel):
    owner: str
    type: str = KUBERNETES_CLUSTER_TYPE
    lifecycle: str | None = None
    system: str | None = None


class CatalogEntity(CatalogBaseModel):
    """A ``Resource`` entity describing one Kubernetes cluster."""

    api_version: str = Field(default=ENTITY_API_VERSION, alias="apiVersion")
    kind: str = RESOURCE_KIND
    metadata: EntityMetadata
    spec: ResourceSpec

    def to_dict(self) -> dict[str, Any]:
        """Wire representation, unset optional fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class DeferredEntity(CatalogBaseModel):
    entity: CatalogEntity
    location_key: str = Field(alias="locationKey")


class EntityMutation(CatalogBaseModel):
    """Full replacement of the entity set owned by one location key."""

    type: Literal["full"] = "full"
    entities: list[DeferredEntity] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ClusterStatusSummary(CatalogBaseModel):
    """Lifecycle status of one discovered cluster."""

    name: str
    namespace: str
    cluster: str = Field(description="Hub cluster the CAPI cluster was discovered on")
    phase: str | None = None
    control_plane_ready: bool = Field(default=False, alias="controlPlaneReady")
    infrastructure_ready: bool = Field(default=False, alias="infrastructureReady")
