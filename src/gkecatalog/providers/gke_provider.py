"""Catalog provider that ingests GKE clusters as Resource entities."""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol
import structlog

from gkecatalog.catalog.connection import EntityProviderConnection
from gkecatalog.catalog.provider import EntityProvider
from gkecatalog.clients.gcp.client_factory import GcpClientFactory
from gkecatalog.config.provider_config import read_gke_provider_config
from gkecatalog.core.base_client import BaseClient
from gkecatalog.core.exceptions import ConnectionNotReadyException, DiscoveryException
from gkecatalog.mappers.entity_mapper import ClusterEntityMapper
from gkecatalog.models.entities import ClusterRecord, EntityMutation
from gkecatalog.scheduling.scheduler import SchedulerService, TaskRunner

logger = structlog.get_logger(__name__)

PROVIDER_NAME = "gcp-gke"


class ClusterListingClient(Protocol):
    async def list_clusters(self, parent: str) -> List[Optional[ClusterRecord]]:
        ...


class GkeEntityProvider(EntityProvider):
    """Periodically lists GKE clusters and submits them as a full snapshot.

    A cycle is all-or-nothing: if listing fails for any parent, nothing is
    submitted and the catalog keeps the previous snapshot until the next
    successful cycle.
    """

    def __init__(self, task_runner: TaskRunner, gke_parents: List[str], client: ClusterListingClient):
        self.gke_parents = list(gke_parents)
        self.client = client
        self.connection: Optional[EntityProviderConnection] = None
        self.logger = logger.bind(provider=self.get_provider_name())
        self.mapper = ClusterEntityMapper(self.get_provider_name())
        self._schedule_fn = self._create_schedule_fn(task_runner)

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        scheduler: SchedulerService,
        client: Optional[ClusterListingClient] = None,
        client_config: Optional[Dict[str, Any]] = None,
    ) -> "GkeEntityProvider":
        """Build a provider from the application config.

        ``client`` replaces the Container API client, mostly for tests. Raises
        ``ConfigurationException`` when the GKE section is malformed.
        """
        provider_config = read_gke_provider_config(config)
        if client is None:
            client = GcpClientFactory(client_config or {}).create_gke_client()

        return cls(
            task_runner=scheduler.create_scheduled_task_runner(provider_config.schedule),
            gke_parents=provider_config.parents,
            client=client,
        )

    def get_provider_name(self) -> str:
        return PROVIDER_NAME

    async def connect(self, connection: EntityProviderConnection) -> None:
        self.connection = connection
        await self._schedule_fn()

    async def disconnect(self) -> None:
        """Release the Container API client."""
        if isinstance(self.client, BaseClient) and self.client.is_connected:
            await self.client.disconnect()

    def _create_schedule_fn(self, task_runner: TaskRunner) -> Callable[[], Awaitable[None]]:
        async def schedule_fn() -> None:
            task_id = f"{self.get_provider_name()}:refresh"

            async def refresh_task() -> None:
                try:
                    await self.refresh()
                except Exception as e:
                    self.logger.error("GKE refresh failed", task_id=task_id, error=str(e), exc_info=True)

            await task_runner.run(task_id, refresh_task)

        return schedule_fn

    async def _get_clusters(self) -> List[ClusterRecord]:
        if isinstance(self.client, BaseClient):
            await self.client.ensure_connected()

        results = await asyncio.gather(
            *(self.client.list_clusters(parent) for parent in self.gke_parents),
            return_exceptions=True,
        )

        failures = {
            parent: str(result)
            for parent, result in zip(self.gke_parents, results)
            if isinstance(result, BaseException)
        }
        if failures:
            raise DiscoveryException(
                "GKE",
                "; ".join(f"{parent}: {error}" for parent, error in failures.items()),
                {"failures": failures},
            )

        return [cluster for clusters in results for cluster in clusters if cluster is not None]

    async def refresh(self) -> None:
        """Run one discovery cycle and submit the result to the connection."""
        if self.connection is None:
            raise ConnectionNotReadyException(self.get_provider_name())

        self.logger.info("Discovering GKE clusters", parents=len(self.gke_parents))

        try:
            clusters = await self._get_clusters()
        except Exception as e:
            self.logger.error("error fetching GKE clusters", error=str(e))
            return

        resources = self.mapper.map_clusters(clusters)

        self.logger.info(
            f"Ingesting GKE clusters [{', '.join(r.entity.metadata.name for r in resources)}]"
        )

        await self.connection.apply_mutation(
            EntityMutation(
                type="full",
                source=self.get_provider_name(),
                entities=resources,
            )
        )
