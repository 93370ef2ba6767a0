"""Projection of CAPI clusters into catalog entities.

Each entity field is resolved independently: annotation on the CAPI cluster
first, then the provider default, then a built-in fallback. Empty strings
count as unset, and unset optional fields are omitted from the entity.
"""

from __future__ import annotations

from shared.models import (
    ANNOTATION_CAPI_CLUSTER_DESCRIPTION,
    ANNOTATION_CAPI_CLUSTER_LIFECYCLE,
    ANNOTATION_CAPI_CLUSTER_OWNER,
    ANNOTATION_CAPI_CLUSTER_SYSTEM,
    ANNOTATION_CAPI_CLUSTER_TAGS,
    ANNOTATION_CAPI_PROVIDER,
    ANNOTATION_KUBERNETES_API_SERVER,
    ANNOTATION_KUBERNETES_API_SERVER_CA,
    ANNOTATION_KUBERNETES_AUTH_PROVIDER,
    ANNOTATION_LOCATION,
    ANNOTATION_ORIGIN_LOCATION,
    CatalogEntity,
    ClusterAnnotations,
    ClusterCredentials,
    ClusterStatusSummary,
    EntityMetadata,
    ProviderDefaults,
    RemoteCluster,
    ResourceSpec,
)

DEFAULT_OWNER = "guest"
AUTH_PROVIDER_OIDC = "oidc"


def split_tags(value: str | None) -> list[str] | None:
    """Split a comma separated tag list, trimming each tag."""
    if not value:
        return None
    tags = [tag.strip() for tag in value.split(",")]
    return [tag for tag in tags if tag] or None


def cluster_annotations(cluster: RemoteCluster) -> ClusterAnnotations:
    """Extract the catalog fields carried as annotations on a CAPI cluster."""
    annotations = cluster.metadata.annotations
    return ClusterAnnotations(
        lifecycle=annotations.get(ANNOTATION_CAPI_CLUSTER_LIFECYCLE) or None,
        owner=annotations.get(ANNOTATION_CAPI_CLUSTER_OWNER) or None,
        description=annotations.get(ANNOTATION_CAPI_CLUSTER_DESCRIPTION) or None,
        system=annotations.get(ANNOTATION_CAPI_CLUSTER_SYSTEM) or None,
        tags=split_tags(annotations.get(ANNOTATION_CAPI_CLUSTER_TAGS)),
    )


def capi_provider_kind(cluster: RemoteCluster) -> str:
    """Infrastructure provider kind, empty when the reference omits it."""
    ref = cluster.spec.infrastructure_ref
    return (ref.kind if ref else None) or ""


def resolve_fields(
    annotations: ClusterAnnotations,
    defaults: ProviderDefaults | None,
) -> dict:
    """Apply the annotation > provider default > fallback precedence."""
    defaults = defaults or ProviderDefaults()
    return {
        "owner": annotations.owner or defaults.cluster_owner or DEFAULT_OWNER,
        "lifecycle": annotations.lifecycle or defaults.lifecycle or None,
        "system": annotations.system or defaults.system or None,
        "tags": annotations.tags or defaults.tags or None,
        "description": annotations.description,
    }


def map_cluster_entity(
    provider_name: str,
    defaults: ProviderDefaults | None,
    cluster: RemoteCluster,
    credentials: ClusterCredentials | None = None,
) -> CatalogEntity:
    """Build the catalog Resource entity for one CAPI cluster.

    API server annotations are only present when credentials were resolved;
    without them the keys are left out entirely.
    """
    fields = resolve_fields(cluster_annotations(cluster), defaults)

    annotations = {
        ANNOTATION_LOCATION: provider_name,
        ANNOTATION_ORIGIN_LOCATION: provider_name,
        ANNOTATION_CAPI_PROVIDER: capi_provider_kind(cluster),
    }
    if credentials is not None:
        annotations[ANNOTATION_KUBERNETES_API_SERVER] = credentials.server
        if credentials.ca_data:
            annotations[ANNOTATION_KUBERNETES_API_SERVER_CA] = credentials.ca_data
        annotations[ANNOTATION_KUBERNETES_AUTH_PROVIDER] = AUTH_PROVIDER_OIDC

    return CatalogEntity(
        metadata=EntityMetadata(
            name=cluster.name,
            title=cluster.name,
            description=fields["description"],
            annotations=annotations,
            tags=fields["tags"],
        ),
        spec=ResourceSpec(
            owner=fields["owner"],
            lifecycle=fields["lifecycle"],
            system=fields["system"],
        ),
    )


def cluster_status_summary(hub_cluster_name: str, cluster: RemoteCluster) -> ClusterStatusSummary:
    """Lifecycle status of a CAPI cluster as seen on its hub."""
    status = cluster.status
    return ClusterStatusSummary(
        name=cluster.name,
        namespace=cluster.namespace or "",
        cluster=hub_cluster_name,
        phase=status.phase if status else None,
        control_plane_ready=status.control_plane_ready if status else False,
        infrastructure_ready=status.infrastructure_ready if status else False,
    )
