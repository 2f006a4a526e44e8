from .entities import *

__all__ = [
    "ClusterRecord",
    "Entity",
    "EntityMetadata",
    "EntityMutation",
    "ResourceEntity",
    "ResourceSpec",
    "ANNOTATION_KUBERNETES_API_SERVER",
    "ANNOTATION_KUBERNETES_API_SERVER_CA",
    "ANNOTATION_KUBERNETES_AUTH_PROVIDER",
    "ANNOTATION_MANAGED_BY_LOCATION",
    "ANNOTATION_MANAGED_BY_ORIGIN_LOCATION",
]
