from .gke_provider import GkeEntityProvider, PROVIDER_NAME

__all__ = [
    "GkeEntityProvider",
    "PROVIDER_NAME",
]
