"""Catalog connections that receive entity mutations from providers."""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import structlog

from gkecatalog.core.exceptions import StorageException
from gkecatalog.models.entities import EntityMutation, ResourceEntity

logger = structlog.get_logger(__name__)


class EntityProviderConnection(ABC):
    """Sink a provider submits its entity snapshots to."""

    @abstractmethod
    async def apply_mutation(self, mutation: EntityMutation) -> None:
        pass


class InMemoryEntityProviderConnection(EntityProviderConnection):
    """Keeps the latest snapshot per source in memory."""

    def __init__(self):
        self.mutations: List[EntityMutation] = []
        self.entities: Dict[str, List[ResourceEntity]] = {}

    async def apply_mutation(self, mutation: EntityMutation) -> None:
        self.mutations.append(mutation)
        self.entities[mutation.source] = list(mutation.entities)


class FileEntityProviderConnection(EntityProviderConnection):
    """Writes snapshots to a JSON file keyed by source.

    A full mutation replaces everything previously stored for its source and
    leaves other sources untouched.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.last_mutation: Optional[EntityMutation] = None
        self.logger = logger.bind(sink="file", path=str(self.path))

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r') as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageException(f"Failed to read catalog file {self.path}: {e}")
        if not isinstance(document, dict):
            raise StorageException(
                f"Catalog file {self.path} must hold a JSON object, got {type(document).__name__}"
            )
        return document

    def _write(self, mutation: EntityMutation) -> None:
        document = self._read()
        document[mutation.source] = [
            entity.model_dump(by_alias=True) for entity in mutation.entities
        ]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, 'w') as f:
                json.dump(document, f, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageException(f"Failed to write catalog file {self.path}: {e}")

    async def apply_mutation(self, mutation: EntityMutation) -> None:
        await asyncio.to_thread(self._write, mutation)
        self.last_mutation = mutation
        self.logger.info(
            "Applied full mutation",
            source=mutation.source,
            entities=len(mutation.entities),
        )
