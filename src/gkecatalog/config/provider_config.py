"""Provider configuration read from the application YAML file."""

from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gkecatalog.core.exceptions import ConfigurationException
from gkecatalog.core.utils import parse_duration, safe_get

logger = structlog.get_logger(__name__)

GKE_PROVIDER_CONFIG_KEY = "catalog.providers.gcp.gke"


class ScheduleDefinition(BaseModel):
    """How often, and for how long, a recurring task runs."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    frequency: timedelta
    timeout: timedelta
    initial_delay: Optional[timedelta] = Field(None, alias="initialDelay")

    @field_validator('frequency', mode='before')
    @classmethod
    def validate_frequency(cls, v):
        if isinstance(v, dict) and "cron" in v:
            raise ValueError("cron frequencies are not supported, use an interval")
        duration = parse_duration(v)
        if duration <= timedelta(0):
            raise ValueError("frequency must be positive")
        return duration

    @field_validator('timeout', mode='before')
    @classmethod
    def validate_timeout(cls, v):
        duration = parse_duration(v)
        if duration <= timedelta(0):
            raise ValueError("timeout must be positive")
        return duration

    @field_validator('initial_delay', mode='before')
    @classmethod
    def validate_initial_delay(cls, v):
        if v is None:
            return v
        return parse_duration(v)


class GkeProviderConfig(BaseModel):
    """The ``catalog.providers.gcp.gke`` section."""

    model_config = ConfigDict(frozen=True)

    parents: List[str] = Field(..., min_length=1)
    schedule: ScheduleDefinition

    @field_validator('parents')
    @classmethod
    def validate_parents(cls, v):
        for parent in v:
            if not parent.strip():
                raise ValueError("parents must not contain empty strings")
        return v


def load_app_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load the application YAML configuration file."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationException(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationException(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(config, dict):
        raise ConfigurationException(f"Configuration root in {config_path} must be a mapping")

    logger.debug("Loaded application config", path=str(config_path))
    return config


def read_schedule_definition(config: Dict[str, Any]) -> ScheduleDefinition:
    """Build a schedule definition from a raw configuration mapping."""
    try:
        return ScheduleDefinition.model_validate(config)
    except ValidationError as e:
        raise ConfigurationException(f"Invalid schedule definition: {e}", {"errors": e.errors()})


def read_gke_provider_config(app_config: Dict[str, Any]) -> GkeProviderConfig:
    """Read the GKE provider section out of the full application config."""
    section = safe_get(app_config, GKE_PROVIDER_CONFIG_KEY)
    if section is None:
        raise ConfigurationException(f"Missing required config value at '{GKE_PROVIDER_CONFIG_KEY}'")
    if not isinstance(section, dict):
        raise ConfigurationException(f"'{GKE_PROVIDER_CONFIG_KEY}' must be a mapping")
    if "schedule" not in section:
        raise ConfigurationException(f"Missing required config value at '{GKE_PROVIDER_CONFIG_KEY}.schedule'")

    schedule = read_schedule_definition(section["schedule"])
    try:
        return GkeProviderConfig(parents=section.get("parents"), schedule=schedule)
    except ValidationError as e:
        raise ConfigurationException(f"Invalid GKE provider config: {e}", {"errors": e.errors()})
