"""CAPI cluster entity provider.

One provider projects the CAPI clusters of one hub cluster into the catalog.
It is constructed disconnected; ``connect`` binds the catalog connection and
registers the recurring refresh task. Each refresh submits the complete set
of entities for the provider's location key.
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Any, Mapping

import structlog

from shared.config import RootConfig
from shared.models import (
    ClusterStatusSummary,
    DeferredEntity,
    EntityMutation,
    ProviderConfig,
)
from shared.observability import bind_task_logger, get_logger

from ..errors import ConfigurationError, NotInitializedError, ProviderError
from ..schemas.provider import ProviderSummary, RefreshOutcome
from .capi import list_clusters
from .catalog import EntityProviderConnection
from .config_resolver import as_root_config, read_provider_configs
from .entity_mapper import cluster_status_summary, map_cluster_entity
from .kube_clients import HubClients, build_clients
from .kubeconfig import resolve_all_credentials
from .scheduler import TaskInvocation, TaskRunner, TaskScheduler

logger = get_logger(__name__)


class CAPIClusterProvider:
    """Provides catalog Resource entities for the CAPI clusters of a hub."""

    def __init__(
        self,
        config: ProviderConfig,
        clients: HubClients,
        task_runner: TaskRunner,
        log: structlog.stdlib.BoundLogger | None = None,
    ):
        self.config = config
        self.custom_objects_client = clients.custom_objects
        self.client = clients.core
        self.task_runner = task_runner
        self.logger = (log or logger).bind(
            provider=self.get_provider_name(),
            hub_cluster=clients.cluster_name,
        )
        self.connection: EntityProviderConnection | None = None
        self.last_outcome: RefreshOutcome | None = None

    @classmethod
    def from_config(
        cls,
        root_config: RootConfig | Mapping[str, Any],
        *,
        schedule: TaskRunner | None = None,
        scheduler: TaskScheduler | None = None,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> list[CAPIClusterProvider]:
        """Create one provider per configured CAPI provider.

        An explicit ``schedule`` runner applies to every provider and wins
        over schedules in config; otherwise ``scheduler`` builds a runner
        from each provider's configured schedule.

        Raises:
            ConfigurationError: If no schedule source exists for a provider,
                or the provider or its hub cluster is misconfigured
        """
        root = as_root_config(root_config)
        provider_configs = read_provider_configs(root)

        if schedule is None and scheduler is None:
            raise ConfigurationError("Either schedule or scheduler must be provided.")

        providers = []
        for provider_config in provider_configs:
            if schedule is None and provider_config.schedule is None:
                raise ConfigurationError(
                    "No schedule provided via code or config for "
                    f"CAPIClusterProvider:{provider_config.id}."
                )

            task_runner = schedule or scheduler.create_scheduled_task_runner(
                provider_config.schedule
            )
            clients = build_clients(provider_config.hub_cluster_name, root, log)
            providers.append(cls(provider_config, clients, task_runner, log))

        return providers

    def get_provider_name(self) -> str:
        return f"CAPIClusterProvider:{self.config.id}"

    @property
    def task_id(self) -> str:
        return f"{self.get_provider_name()}:refresh"

    @property
    def connected(self) -> bool:
        return self.connection is not None

    async def connect(self, connection: EntityProviderConnection) -> None:
        """Bind the catalog connection and schedule the refresh task.

        Raises:
            ProviderError: If the provider is already connected
        """
        if self.connection is not None:
            raise ProviderError(f"{self.get_provider_name()} is already connected")

        self.connection = connection
        await self.task_runner.run(
            TaskInvocation(id=self.task_id, fn=self.run_scheduled_refresh)
        )
        self.logger.info("Connected to catalog", task_id=self.task_id)

    async def run_scheduled_refresh(self) -> RefreshOutcome:
        """Run one refresh under supervision.

        A failed refresh is logged and reported in the returned outcome, and
        the next tick proceeds as usual. Cancellation (the scheduler timeout)
        is recorded as a failed outcome and then propagates.
        """
        task_instance_id = str(uuid.uuid4())
        log = bind_task_logger(
            self.logger.bind(component=type(self).__name__),
            provider=self.get_provider_name(),
            task_id=self.task_id,
            task_instance_id=task_instance_id,
        )
        started_at = datetime.now(timezone.utc)

        try:
            mutation = await self.refresh(log)
        except asyncio.CancelledError:
            # Timed out or shut down; record the run before letting go
            log.warning(f"{self.get_provider_name()} refresh cancelled")
            self.last_outcome = RefreshOutcome(
                provider=self.get_provider_name(),
                task_id=self.task_id,
                task_instance_id=task_instance_id,
                succeeded=False,
                error="cancelled",
                started_at=started_at,
                finished_at=datetime.now(timezone.utc),
            )
            raise
        except Exception as e:
            log.error(
                f"{self.get_provider_name()} refresh failed",
                error=str(e),
                exc_info=True,
            )
            outcome = RefreshOutcome(
                provider=self.get_provider_name(),
                task_id=self.task_id,
                task_instance_id=task_instance_id,
                succeeded=False,
                error=str(e),
                started_at=started_at,
                finished_at=datetime.now(timezone.utc),
            )
        else:
            outcome = RefreshOutcome(
                provider=self.get_provider_name(),
                task_id=self.task_id,
                task_instance_id=task_instance_id,
                succeeded=True,
                entity_count=len(mutation.entities),
                started_at=started_at,
                finished_at=datetime.now(timezone.utc),
            )

        self.last_outcome = outcome
        return outcome

    async def refresh(self, log: structlog.stdlib.BoundLogger | None = None) -> EntityMutation:
        """Project the hub's CAPI clusters into the catalog.

        Listing errors and catalog errors propagate and nothing partial is
        submitted; credential lookups degrade per cluster.

        Raises:
            NotInitializedError: If called before ``connect``
        """
        if self.connection is None:
            raise NotInitializedError("Not initialized")

        log = log or self.logger
        provider_name = self.get_provider_name()
        log.info(
            "Providing CAPI Cluster resources",
            hub_cluster=self.config.hub_cluster_name,
        )

        clusters = await list_clusters(self.custom_objects_client, log)
        credentials = await resolve_all_credentials(self.client, clusters, log)

        mutation = EntityMutation(
            type="full",
            entities=[
                DeferredEntity(
                    entity=map_cluster_entity(
                        provider_name,
                        self.config.defaults,
                        cluster,
                        credentials.get(cluster.key),
                    ),
                    location_key=provider_name,
                )
                for cluster in clusters
            ],
        )

        await self.connection.apply_mutation(mutation)
        log.info("Applied CAPI Cluster resources", entity_count=len(mutation.entities))
        return mutation

    async def list_cluster_statuses(self) -> list[ClusterStatusSummary]:
        """Current lifecycle status of every CAPI cluster on the hub."""
        clusters = await list_clusters(self.custom_objects_client, self.logger)
        return [
            cluster_status_summary(self.config.hub_cluster_name, cluster)
            for cluster in clusters
        ]

    def summary(self) -> ProviderSummary:
        return ProviderSummary(
            id=self.config.id,
            name=self.get_provider_name(),
            hub_cluster_name=self.config.hub_cluster_name,
            connected=self.connected,
            last_refresh=self.last_outcome,
        )