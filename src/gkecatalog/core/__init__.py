from .exceptions import *
from .base_client import BaseClient
from .utils import *

__all__ = [
    "BaseClient",
    "GkeCatalogException",
    "DiscoveryException",
    "ClientConnectionException",
    "ConfigurationException",
    "ConnectionNotReadyException",
    "StorageException",
    "TaskTimeoutException",
    "parse_duration",
    "safe_get",
    "setup_logging",
]
