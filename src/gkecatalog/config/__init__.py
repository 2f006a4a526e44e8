from .settings import Settings, GcpSettings, CatalogSettings, LogLevel, LogFormat
from .provider_config import (
    GkeProviderConfig,
    ScheduleDefinition,
    load_app_config,
    read_gke_provider_config,
    read_schedule_definition,
)

__all__ = [
    "Settings",
    "GcpSettings",
    "CatalogSettings",
    "LogLevel",
    "LogFormat",
    "GkeProviderConfig",
    "ScheduleDefinition",
    "load_app_config",
    "read_gke_provider_config",
    "read_schedule_definition",
]
