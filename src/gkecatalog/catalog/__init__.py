from .connection import (
    EntityProviderConnection,
    FileEntityProviderConnection,
    InMemoryEntityProviderConnection,
)
from .provider import EntityProvider

__all__ = [
    "EntityProvider",
    "EntityProviderConnection",
    "FileEntityProviderConnection",
    "InMemoryEntityProviderConnection",
]
