"""Custom exceptions for the GKE catalog provider."""

from typing import Optional, Dict, Any


class GkeCatalogException(Exception):
    """Base exception for the GKE catalog provider."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DiscoveryException(GkeCatalogException):
    """Raised when cluster discovery fails."""

    def __init__(self, discovery_type: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.discovery_type = discovery_type
        super().__init__(f"Discovery failed for {discovery_type}: {message}", details)


class ClientConnectionException(GkeCatalogException):
    """Raised when client connections fail."""

    def __init__(self, client_type: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.client_type = client_type
        super().__init__(f"{client_type} connection failed: {message}", details)


class ConfigurationException(GkeCatalogException):
    """Raised when configuration is invalid."""
    pass


class ConnectionNotReadyException(GkeCatalogException):
    """Raised when a provider is refreshed before a catalog connection is attached."""

    def __init__(self, provider_name: str):
        self.provider_name = provider_name
        super().__init__("Not initialized", {"provider": provider_name})


class TaskTimeoutException(GkeCatalogException):
    """Raised when a task run inline exceeds its schedule timeout."""

    def __init__(self, task_id: str, timeout_seconds: float):
        self.task_id = task_id
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Task {task_id} timed out after {timeout_seconds:g}s",
            {"task_id": task_id, "timeout_seconds": timeout_seconds},
        )


class StorageException(GkeCatalogException):
    """Raised when a catalog sink cannot persist a mutation."""
    pass
