"""Catalog connections.

A connection accepts full-replacement mutations for one provider. The
catalog diffs each mutation against the set it last received for the same
location key and retires entities that disappeared.
"""

from __future__ import annotations

import time
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from shared.models import EntityMutation
from shared.observability import get_logger, log_external_call_end, log_external_call_start

from ..errors import CatalogSubmissionError

logger = get_logger(__name__)


class EntityProviderConnection(Protocol):
    async def apply_mutation(self, mutation: EntityMutation) -> None:
        ...


class CatalogBackend(Protocol):
    def connection_for(self, provider_name: str) -> EntityProviderConnection:
        ...

    async def aclose(self) -> None:
        ...


class HttpCatalogConnection:
    """Submits mutations for one provider to the catalog HTTP API."""

    def __init__(self, client: httpx.AsyncClient, provider_name: str):
        self.client = client
        self.provider_name = provider_name

    @property
    def path(self) -> str:
        return f"/api/v1/providers/{quote(self.provider_name, safe=':')}/mutations"

    async def apply_mutation(self, mutation: EntityMutation) -> None:
        """POST the mutation.

        Raises:
            CatalogSubmissionError: On transport errors or a non-2xx response
        """
        log_external_call_start(logger, "catalog", "apply_mutation")
        started = time.monotonic()

        try:
            response = await self.client.post(self.path, json=mutation.to_dict())
        except httpx.HTTPError as e:
            log_external_call_end(
                logger,
                "catalog",
                "apply_mutation",
                success=False,
                duration_ms=(time.monotonic() - started) * 1000,
                error=str(e),
            )
            raise CatalogSubmissionError(f"Catalog unreachable: {e}") from e

        duration_ms = (time.monotonic() - started) * 1000
        if not response.is_success:
            log_external_call_end(
                logger,
                "catalog",
                "apply_mutation",
                success=False,
                duration_ms=duration_ms,
                error=f"HTTP {response.status_code}",
            )
            raise CatalogSubmissionError(
                f"Catalog rejected mutation for {self.provider_name}: "
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        log_external_call_end(
            logger, "catalog", "apply_mutation", success=True, duration_ms=duration_ms
        )


class HttpCatalog:
    """Catalog reached over HTTP; one shared client for all providers."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout, connect=5.0),
            transport=transport,
        )

    def connection_for(self, provider_name: str) -> HttpCatalogConnection:
        return HttpCatalogConnection(self.client, provider_name)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()


class InMemoryCatalogConnection:
    def __init__(self, catalog: InMemoryCatalog, provider_name: str):
        self.catalog = catalog
        self.provider_name = provider_name

    async def apply_mutation(self, mutation: EntityMutation) -> None:
        self.catalog.apply(self.provider_name, mutation)


class InMemoryCatalog:
    """Catalog kept in process memory.

    Used when no catalog URL is configured; keeps the latest full set per
    location key.
    """

    def __init__(self) -> None:
        self.entities: dict[str, list[dict[str, Any]]] = {}
        self.mutations: list[EntityMutation] = []

    def connection_for(self, provider_name: str) -> InMemoryCatalogConnection:
        return InMemoryCatalogConnection(self, provider_name)

    def apply(self, location_key: str, mutation: EntityMutation) -> None:
        previous = {e["metadata"]["name"] for e in self.entities.get(location_key, [])}
        current = [deferred.entity.to_dict() for deferred in mutation.entities]
        removed = previous - {e["metadata"]["name"] for e in current}

        self.entities[location_key] = current
        self.mutations.append(mutation)
        logger.info(
            "Applied full mutation",
            location_key=location_key,
            entity_count=len(current),
            removed=sorted(removed),
        )

    async def aclose(self) -> None:
        pass
