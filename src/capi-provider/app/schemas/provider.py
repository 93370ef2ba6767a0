"""Provider API schemas."""

from datetime import datetime

from pydantic import Field

from shared.models import CatalogBaseModel


class RefreshOutcome(CatalogBaseModel):
    """Result of one supervised refresh run."""

    provider: str
    task_id: str
    task_instance_id: str | None = None
    succeeded: bool
    entity_count: int = Field(default=0, ge=0)
    error: str | None = None
    started_at: datetime
    finished_at: datetime


class ProviderSummary(CatalogBaseModel):
    """A configured provider and its last refresh."""

    id: str
    name: str
    hub_cluster_name: str
    connected: bool
    last_refresh: RefreshOutcome | None = None
