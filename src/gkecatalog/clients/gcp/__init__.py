from .client_factory import GcpClientFactory
from .gke_client import GkeClient


__all__ = [
    "GcpClientFactory",
    "GkeClient",
]
