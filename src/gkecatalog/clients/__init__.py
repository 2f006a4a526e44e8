from .gcp import GcpClientFactory, GkeClient

__all__ = ["GcpClientFactory", "GkeClient"]
