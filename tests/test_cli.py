"""Unit tests for the gke-catalog command line."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from conftest import make_client, make_cluster
from gkecatalog.cli import cli
from gkecatalog.core.exceptions import DiscoveryException
from gkecatalog.providers.gke_provider import GkeEntityProvider
from gkecatalog.scheduling.scheduler import TaskScheduler

CONFIG = """\
catalog:
  providers:
    gcp:
      gke:
        parents:
          - projects/p1/locations/-
          - projects/p2/locations/-
        schedule:
          frequency: {minutes: 30}
          timeout: {minutes: 3}
"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("GCP_CREDENTIALS_FILE", "GCP_QUOTA_PROJECT_ID", "CATALOG_OUTPUT_PATH", "CONFIG_FILE", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / "app-config.yaml").write_text(CONFIG)
    return tmp_path


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("gkecatalog.cli.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def mock_factory():
    with patch("gkecatalog.cli.GcpClientFactory") as mock_factory:
        yield mock_factory


@pytest.mark.unit
def test_refresh_writes_catalog_file(workdir, mock_factory):
    mock_factory.return_value.create_gke_client.return_value = make_client({
        "projects/p1/locations/-": [make_cluster(name="a")],
        "projects/p2/locations/-": [make_cluster(name="b", endpoint=None)],
    })
    output = workdir / "out" / "entities.json"

    result = CliRunner().invoke(cli, ["refresh", "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert "Ingested 1 GKE clusters" in result.output
    assert "a (gcp-gke:us)" in result.output
    document = json.loads(output.read_text())
    assert [e["entity"]["metadata"]["name"] for e in document["gcp-gke"]] == ["a"]


@pytest.mark.unit
def test_refresh_reports_failed_cycle(workdir, mock_factory):
    mock_factory.return_value.create_gke_client.return_value = make_client({
        "projects/p1/locations/-": DiscoveryException("GKE", "permission denied"),
        "projects/p2/locations/-": [make_cluster()],
    })
    output = workdir / "entities.json"

    result = CliRunner().invoke(cli, ["refresh", "--output", str(output)])

    assert result.exit_code == 1
    assert "No snapshot submitted" in result.output
    assert not output.exists()


@pytest.mark.unit
def test_refresh_with_missing_config(workdir, mock_factory):
    result = CliRunner().invoke(cli, ["refresh", "--config", str(workdir / "absent.yaml")])

    assert result.exit_code == 1
    assert "Refresh failed" in result.output
    assert "not found" in result.output


@pytest.mark.unit
def test_refresh_uses_settings_from_env(workdir, mock_factory, monkeypatch):
    monkeypatch.setenv("GCP_CREDENTIALS_FILE", "/secrets/sa.json")
    monkeypatch.setenv("CATALOG_OUTPUT_PATH", str(workdir / "env-output.json"))
    mock_factory.return_value.create_gke_client.return_value = make_client({
        "projects/p1/locations/-": [],
        "projects/p2/locations/-": [make_cluster()],
    })

    result = CliRunner().invoke(cli, ["refresh"])

    assert result.exit_code == 0, result.output
    assert mock_factory.call_args.args[0]["credentials_file"] == "/secrets/sa.json"
    assert (workdir / "env-output.json").exists()


@pytest.mark.unit
def test_debug_flag_sets_debug_log_level(workdir, mock_factory, no_logging_setup):
    mock_factory.return_value.create_gke_client.return_value = make_client({
        "projects/p1/locations/-": [],
        "projects/p2/locations/-": [],
    })

    result = CliRunner().invoke(cli, ["refresh", "--debug", "--output", str(workdir / "e.json")])

    assert result.exit_code == 0, result.output
    assert no_logging_setup.call_args.kwargs["log_level"] == "DEBUG"


@pytest.mark.unit
def test_refresh_reports_timed_out_cycle(workdir, mock_factory):
    (workdir / "app-config.yaml").write_text(
        CONFIG.replace("timeout: {minutes: 3}", "timeout: {milliseconds: 20}")
    )

    async def slow_list_clusters(parent):
        await asyncio.sleep(5)
        return []

    client = MagicMock()
    client.list_clusters = AsyncMock(side_effect=slow_list_clusters)
    mock_factory.return_value.create_gke_client.return_value = client
    output = workdir / "entities.json"

    result = CliRunner().invoke(cli, ["refresh", "--output", str(output)])

    assert result.exit_code == 1
    assert "❌ Refresh failed: Task gcp-gke:refresh timed out" in result.output
    assert not output.exists()


class RecordingScheduler(TaskScheduler):
    """Scheduler whose wait returns once the catalog file appears."""

    instances = []
    output_path = None

    def __init__(self):
        super().__init__()
        self.shut_down = False
        RecordingScheduler.instances.append(self)

    async def wait(self) -> None:
        for _ in range(200):
            if self.output_path.exists():
                return
            await asyncio.sleep(0.01)

    async def shutdown(self) -> None:
        await super().shutdown()
        self.shut_down = True


@pytest.fixture
def recording_scheduler(workdir):
    RecordingScheduler.instances = []
    RecordingScheduler.output_path = workdir / "scheduled.json"
    with patch("gkecatalog.cli.TaskScheduler", RecordingScheduler):
        yield RecordingScheduler


@pytest.mark.unit
def test_run_schedules_refresh_and_cleans_up(workdir, mock_factory, recording_scheduler):
    mock_factory.return_value.create_gke_client.return_value = make_client({
        "projects/p1/locations/-": [make_cluster(name="a")],
        "projects/p2/locations/-": [],
    })
    output = recording_scheduler.output_path

    with patch.object(GkeEntityProvider, "disconnect", new_callable=AsyncMock) as mock_disconnect:
        result = CliRunner().invoke(cli, ["run", "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert f"🚀 Scheduled gcp-gke:refresh, writing to {output}" in result.output
    [scheduler] = recording_scheduler.instances
    assert scheduler.shut_down
    assert scheduler.task_ids == []
    mock_disconnect.assert_awaited_once()
    document = json.loads(output.read_text())
    assert [e["entity"]["metadata"]["name"] for e in document["gcp-gke"]] == ["a"]


@pytest.mark.unit
def test_run_with_missing_config(workdir, mock_factory, recording_scheduler):
    result = CliRunner().invoke(cli, ["run", "--config", str(workdir / "absent.yaml")])

    assert result.exit_code == 1
    assert "❌ Provider failed" in result.output
    assert "not found" in result.output
    assert mock_factory.return_value.create_gke_client.call_count == 0
