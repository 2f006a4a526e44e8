"""Command line entry point for the GKE catalog provider."""

import asyncio
import sys
import traceback
from typing import Optional

import click

from gkecatalog.catalog.connection import FileEntityProviderConnection
from gkecatalog.clients.gcp.client_factory import GcpClientFactory
from gkecatalog.config.provider_config import load_app_config
from gkecatalog.config.settings import Settings
from gkecatalog.core.exceptions import GkeCatalogException
from gkecatalog.core.utils import setup_logging
from gkecatalog.providers.gke_provider import GkeEntityProvider
from gkecatalog.scheduling.scheduler import OneShotScheduler, SchedulerService, TaskScheduler


def _load_settings(debug: bool) -> Settings:
    settings = Settings.create_from_env()
    log_level = "DEBUG" if debug else settings.log_level.value
    setup_logging(
        config_path=settings.logging_config_file,
        log_level=log_level,
        log_format=settings.log_format.value,
    )
    return settings


def _build_provider(settings: Settings, config_file: Optional[str], scheduler: SchedulerService) -> GkeEntityProvider:
    app_config = load_app_config(config_file or settings.config_file)
    client_config = settings.gcp.model_dump()
    client = GcpClientFactory(client_config).create_gke_client()
    return GkeEntityProvider.from_config(app_config, scheduler, client=client)


@click.group()
def cli():
    """Ingest GKE clusters into a catalog as Resource entities.

    Configure the provider in app-config.yaml under catalog.providers.gcp.gke
    and, optionally, GCP credentials in your .env file:

        GCP_CREDENTIALS_FILE=/path/to/service-account.json
    """


@cli.command()
@click.option('--config', '-c', 'config_file', default=None, help='Provider YAML config (default: CONFIG_FILE or ./app-config.yaml)')
@click.option('--output', '-o', default=None, help='Catalog JSON file (default: CATALOG_OUTPUT_PATH)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def refresh(config_file, output, debug):
    """Run a single discovery cycle and write the snapshot to the catalog file."""

    async def run_refresh() -> int:
        settings = _load_settings(debug)
        provider = _build_provider(settings, config_file, OneShotScheduler())
        connection = FileEntityProviderConnection(output or settings.catalog.output_path)

        try:
            await provider.connect(connection)
        finally:
            await provider.disconnect()

        mutation = connection.last_mutation
        if mutation is None:
            click.echo("❌ No snapshot submitted, the discovery cycle failed (see logs)")
            return 1

        click.echo(f"✅ Ingested {len(mutation.entities)} GKE clusters into {connection.path}")
        for resource in mutation.entities:
            click.echo(f"   • {resource.entity.metadata.name} ({resource.location_key})")
        return 0

    try:
        exit_code = asyncio.run(run_refresh())
    except GkeCatalogException as e:
        click.echo(f"❌ Refresh failed: {e}")
        if debug:
            click.echo(traceback.format_exc())
        exit_code = 1
    sys.exit(exit_code)


@cli.command()
@click.option('--config', '-c', 'config_file', default=None, help='Provider YAML config (default: CONFIG_FILE or ./app-config.yaml)')
@click.option('--output', '-o', default=None, help='Catalog JSON file (default: CATALOG_OUTPUT_PATH)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def run(config_file, output, debug):
    """Run discovery on the configured schedule until interrupted."""

    async def run_scheduled() -> None:
        settings = _load_settings(debug)
        scheduler = TaskScheduler()
        provider = _build_provider(settings, config_file, scheduler)
        connection = FileEntityProviderConnection(output or settings.catalog.output_path)

        try:
            await provider.connect(connection)
            click.echo(f"🚀 Scheduled {', '.join(scheduler.task_ids)}, writing to {connection.path}")
            await scheduler.wait()
        finally:
            await scheduler.shutdown()
            await provider.disconnect()

    try:
        asyncio.run(run_scheduled())
    except KeyboardInterrupt:
        click.echo("Stopped")
    except GkeCatalogException as e:
        click.echo(f"❌ Provider failed: {e}")
        if debug:
            click.echo(traceback.format_exc())
        sys.exit(1)


if __name__ == '__main__':
    cli()
