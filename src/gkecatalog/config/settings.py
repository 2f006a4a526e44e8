from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from enum import Enum
from dotenv import load_dotenv

# Load .env file explicitly
load_dotenv()


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


class GcpSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GCP_")

    credentials_file: Optional[str] = Field(None, description="Path to a service account key file")
    quota_project_id: Optional[str] = Field(None, description="Project billed for Container API quota")


class CatalogSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CATALOG_")

    output_path: str = Field("./data/catalog_entities.json", description="File the JSON sink writes to")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: LogLevel = Field(LogLevel.INFO, description="Log level")
    log_format: LogFormat = Field(LogFormat.TEXT, description="Log format (json or text)")
    logging_config_file: Optional[str] = Field(None, description="YAML logging dictConfig file")
    config_file: str = Field("./app-config.yaml", description="Provider configuration file")

    gcp: GcpSettings = Field(default_factory=lambda: GcpSettings())
    catalog: CatalogSettings = Field(default_factory=lambda: CatalogSettings())

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @field_validator('log_format', mode='before')
    @classmethod
    def validate_log_format(cls, v):
        if isinstance(v, str):
            return LogFormat(v.lower())
        return v

    @classmethod
    def create_from_env(cls) -> "Settings":
        """Create settings instance from environment variables."""
        return cls()
