"""Pytest configuration and fixtures for gke-catalog-provider tests."""

from typing import Any, Dict, Union, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from gkecatalog.models.entities import ClusterRecord

ListResult = Union[List[Optional[ClusterRecord]], Exception]


def make_cluster(**overrides: Any) -> ClusterRecord:
    """Build a complete cluster record, overriding selected fields."""
    fields = {
        "name": "a",
        "self_link": "s",
        "location": "us",
        "endpoint": "1.2.3.4",
    }
    fields.update(overrides)
    return ClusterRecord(**fields)


def make_client(responses: Dict[str, ListResult]) -> MagicMock:
    """Fake Container API client answering per parent, raising for exception values."""
    client = MagicMock()

    async def list_clusters(parent: str):
        result = responses[parent]
        if isinstance(result, Exception):
            raise result
        return result

    client.list_clusters = AsyncMock(side_effect=list_clusters)
    return client


@pytest.fixture
def app_config() -> Dict[str, Any]:
    return {
        "catalog": {
            "providers": {
                "gcp": {
                    "gke": {
                        "parents": ["p1", "p2"],
                        "schedule": {
                            "frequency": {"minutes": 30},
                            "timeout": {"minutes": 3},
                        },
                    }
                }
            }
        }
    }


@pytest.fixture
def task_runner() -> MagicMock:
    runner = MagicMock()
    runner.run = AsyncMock()
    return runner


@pytest.fixture
def scheduler(task_runner: MagicMock) -> MagicMock:
    scheduler = MagicMock()
    scheduler.create_scheduled_task_runner.return_value = task_runner
    return scheduler
