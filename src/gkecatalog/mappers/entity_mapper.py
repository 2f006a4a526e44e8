"""Maps GKE cluster records to catalog resource entities."""

from typing import Iterable, List, Optional
import structlog

from gkecatalog.models.entities import (
    ANNOTATION_KUBERNETES_API_SERVER,
    ANNOTATION_KUBERNETES_API_SERVER_CA,
    ANNOTATION_KUBERNETES_AUTH_PROVIDER,
    ANNOTATION_MANAGED_BY_LOCATION,
    ANNOTATION_MANAGED_BY_ORIGIN_LOCATION,
    ClusterRecord,
    Entity,
    EntityMetadata,
    ResourceEntity,
)

logger = structlog.get_logger(__name__)

GOOGLE_AUTH_PROVIDER = "google"


class ClusterEntityMapper:
    """Maps cluster records to ``Resource`` entities owned by one provider."""

    def __init__(self, provider_name: str):
        self.provider_name = provider_name
        self.logger = logger.bind(provider=provider_name)

    def location_key(self, cluster: ClusterRecord) -> str:
        return f"{self.provider_name}:{cluster.location}"

    def map_cluster(self, cluster: ClusterRecord) -> Optional[ResourceEntity]:
        """Map one cluster, or return None when a required field is missing."""
        if not (cluster.name and cluster.self_link and cluster.location and cluster.endpoint):
            self.logger.warning(
                "ignoring partial cluster, one of name, endpoint, selfLink or location is missing",
                name=cluster.name,
                endpoint=cluster.endpoint,
                self_link=cluster.self_link,
                location=cluster.location,
            )
            return None

        location_key = self.location_key(cluster)
        return ResourceEntity(
            location_key=location_key,
            entity=Entity(
                metadata=EntityMetadata(
                    name=cluster.name,
                    annotations={
                        ANNOTATION_KUBERNETES_API_SERVER: f"https://{cluster.endpoint}",
                        ANNOTATION_KUBERNETES_API_SERVER_CA: cluster.master_auth_ca_certificate or "",
                        ANNOTATION_KUBERNETES_AUTH_PROVIDER: GOOGLE_AUTH_PROVIDER,
                        ANNOTATION_MANAGED_BY_LOCATION: location_key,
                        ANNOTATION_MANAGED_BY_ORIGIN_LOCATION: location_key,
                    },
                ),
            ),
        )

    def map_clusters(self, clusters: Iterable[Optional[ClusterRecord]]) -> List[ResourceEntity]:
        """Map clusters in order, skipping empty slots and partial records."""
        resources = []
        for cluster in clusters:
            if cluster is None:
                continue
            resource = self.map_cluster(cluster)
            if resource is not None:
                resources.append(resource)
        return resources
