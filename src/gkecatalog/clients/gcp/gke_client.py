"""Google Kubernetes Engine client."""

from typing import Dict, Any, List, Optional
from google.api_core.client_options import ClientOptions
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import container_v1

from gkecatalog.core.base_client import BaseClient
from gkecatalog.core.exceptions import ClientConnectionException, DiscoveryException
from gkecatalog.models.entities import ClusterRecord


class GkeClient(BaseClient):
    """Client for listing clusters through the Cloud Container API."""

    service_name = "GKE"

    def __init__(self, credentials=None, config: Optional[Dict[str, Any]] = None):
        super().__init__(config or {}, "GkeClient")
        self.credentials = credentials
        self.quota_project_id = self.config.get("quota_project_id")
        self._client: Optional[container_v1.ClusterManagerAsyncClient] = None

    async def connect(self) -> None:
        """Connect to the Container API."""
        client_options = None
        if self.quota_project_id:
            client_options = ClientOptions(quota_project_id=self.quota_project_id)

        try:
            self._client = container_v1.ClusterManagerAsyncClient(
                credentials=self.credentials,
                client_options=client_options,
            )
            self._connected = True
            self.logger.info("GKE client connected successfully")
        except GoogleAuthError as e:
            raise ClientConnectionException("GKE", f"Connection failed: {e}")

    async def disconnect(self) -> None:
        """Disconnect from the Container API."""
        if self._client:
            await self._client.transport.close()
            self._client = None
            self._connected = False
            self.logger.info("GKE client disconnected")

    async def health_check(self) -> bool:
        return self._connected and self._client is not None

    async def list_clusters(self, parent: str) -> List[Optional[ClusterRecord]]:
        """List the clusters visible under ``parent``.

        ``parent`` is a ``projects/<project>/locations/<location>`` path;
        ``-`` as location matches all zones and regions.
        """
        self.require_connection()

        request = container_v1.ListClustersRequest(parent=parent)
        try:
            response = await self._client.list_clusters(request=request)
        except GoogleAPIError as e:
            raise DiscoveryException("GKE", f"Failed to list clusters under {parent}: {e}", {"parent": parent})

        clusters = [
            self._extract_cluster_data(cluster) if cluster is not None else None
            for cluster in response.clusters
        ]
        self.logger.debug("Listed GKE clusters", parent=parent, count=len(clusters))
        return clusters

    def _extract_cluster_data(self, cluster) -> ClusterRecord:
        """Extract cluster data from a Container API response.

        Unset proto3 strings come back empty and are stored as None.
        """
        ca_certificate = cluster.master_auth.cluster_ca_certificate if cluster.master_auth else None
        return ClusterRecord(
            name=cluster.name or None,
            self_link=cluster.self_link or None,
            location=cluster.location or None,
            endpoint=cluster.endpoint or None,
            master_auth_ca_certificate=ca_certificate or None,
        )
