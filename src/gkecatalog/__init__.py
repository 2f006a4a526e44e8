"""Ingest Google Kubernetes Engine clusters into a software catalog."""

from .catalog import (
    EntityProvider,
    EntityProviderConnection,
    FileEntityProviderConnection,
    InMemoryEntityProviderConnection,
)
from .models import ClusterRecord, EntityMutation, ResourceEntity
from .providers import GkeEntityProvider
from .scheduling import OneShotScheduler, TaskScheduler

__version__ = "0.1.0"

__all__ = [
    "ClusterRecord",
    "EntityMutation",
    "EntityProvider",
    "EntityProviderConnection",
    "FileEntityProviderConnection",
    "GkeEntityProvider",
    "InMemoryEntityProviderConnection",
    "OneShotScheduler",
    "ResourceEntity",
    "TaskScheduler",
]
