"""Configuration management with Pydantic Settings.

Process-level settings (logging, server, catalog endpoint, location of the
application config file) are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)

The hierarchical application config (providers, cluster locators) lives in a
YAML file and is parsed by ``shared.config.app_config``.
"""

from datetime import timedelta
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="capi-catalog-provider", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server bind port")
    debug: bool = Field(default=False, description="Enable debug mode")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()


class CAPIProviderSettings(Settings):
    """Settings specific to the CAPI catalog provider service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    config_file: str = Field(
        default="app-config.yaml",
        alias="APP_CONFIG_FILE",
        description="Path to the YAML application config",
    )
    catalog_url: str | None = Field(
        default=None,
        description="Catalog base URL; mutations are kept in memory when unset",
    )
    catalog_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for catalog mutation requests",
    )

    # Process-wide refresh schedule, used for providers without their own
    default_schedule_frequency_seconds: int | None = Field(
        default=None,
        description="Refresh interval applied to every provider",
    )
    default_schedule_timeout_seconds: int = Field(
        default=600,
        description="Maximum duration of one refresh run",
    )
    default_schedule_initial_delay_seconds: int = Field(
        default=0,
        description="Delay before the first refresh run",
    )

    @field_validator("default_schedule_frequency_seconds")
    @classmethod
    def validate_frequency(cls, v: int | None) -> int | None:
        """Ensure the process-wide frequency is positive."""
        if v is not None and v <= 0:
            raise ValueError("default_schedule_frequency_seconds must be positive")
        return v

    @property
    def default_schedule(self) -> dict[str, timedelta] | None:
        """Process-wide schedule, or None when no frequency is configured."""
        if self.default_schedule_frequency_seconds is None:
            return None
        return {
            "frequency": timedelta(seconds=self.default_schedule_frequency_seconds),
            "timeout": timedelta(seconds=self.default_schedule_timeout_seconds),
            "initial_delay": timedelta(seconds=self.default_schedule_initial_delay_seconds),
        }
