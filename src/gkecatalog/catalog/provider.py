"""Base entity provider interface."""

from abc import ABC, abstractmethod

from .connection import EntityProviderConnection


class EntityProvider(ABC):
    """A source of catalog entities, identified by a stable name."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Name used as mutation source and location key prefix."""
        pass

    @abstractmethod
    async def connect(self, connection: EntityProviderConnection) -> None:
        """Attach the catalog connection this provider submits to."""
        pass
