"""Base client interface for cloud API clients."""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import structlog

from gkecatalog.core.exceptions import DiscoveryException

logger = structlog.get_logger(__name__)


class BaseClient(ABC):
    """Async lifecycle shared by cloud API clients.

    Subclasses create their SDK client in ``connect`` and release it in
    ``disconnect``; calls made in between may use ``require_connection``.
    """

    service_name = "cloud"

    def __init__(self, config: Dict[str, Any], name: Optional[str] = None):
        self.config = config
        self.name = name or self.__class__.__name__
        self._connected = False
        self.logger = logger.bind(client=self.name)

    @abstractmethod
    async def connect(self) -> None:
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def ensure_connected(self) -> None:
        """Connect unless already connected."""
        if not self._connected:
            await self.connect()

    def require_connection(self) -> None:
        if not self._connected:
            raise DiscoveryException(self.service_name, "Client not connected")

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()
