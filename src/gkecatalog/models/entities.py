"""Catalog entity models and the cluster records they are built from."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ENTITY_API_VERSION = "backstage.io/v1alpha1"
RESOURCE_KIND = "Resource"
DEFAULT_NAMESPACE = "default"
KUBERNETES_CLUSTER_TYPE = "kubernetes-cluster"
UNKNOWN_OWNER = "unknown"

ANNOTATION_KUBERNETES_API_SERVER = "kubernetes.io/api-server"
ANNOTATION_KUBERNETES_API_SERVER_CA = "kubernetes.io/api-server-certificate-authority"
ANNOTATION_KUBERNETES_AUTH_PROVIDER = "kubernetes.io/auth-provider"
ANNOTATION_MANAGED_BY_LOCATION = "backstage.io/managed-by-location"
ANNOTATION_MANAGED_BY_ORIGIN_LOCATION = "backstage.io/managed-by-origin-location"


class ClusterRecord(BaseModel):
    """A GKE cluster as returned by the Container API. Read-only."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Optional[str] = None
    self_link: Optional[str] = Field(None, alias="selfLink")
    location: Optional[str] = None
    endpoint: Optional[str] = None
    master_auth_ca_certificate: Optional[str] = Field(None, alias="masterAuthCaCertificate")


class EntityMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = DEFAULT_NAMESPACE
    annotations: Dict[str, str] = Field(default_factory=dict)


class ResourceSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = KUBERNETES_CLUSTER_TYPE
    owner: str = UNKNOWN_OWNER


class Entity(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_version: str = Field(ENTITY_API_VERSION, alias="apiVersion")
    kind: str = RESOURCE_KIND
    metadata: EntityMetadata
    spec: ResourceSpec = Field(default_factory=ResourceSpec)


class ResourceEntity(BaseModel):
    """An entity paired with the location key that owns it in the catalog."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    location_key: str = Field(..., alias="locationKey")
    entity: Entity


class EntityMutation(BaseModel):
    """A snapshot of entities submitted to a catalog connection.

    ``full`` mutations replace every entity previously submitted by
    ``source``.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["full"] = "full"
    source: str
    entities: List[ResourceEntity] = Field(default_factory=list)
