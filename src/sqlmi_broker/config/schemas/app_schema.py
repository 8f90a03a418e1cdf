"""Application configuration schema."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AzureConfig(BaseModel):
    """Control plane connection settings."""

    model_config = ConfigDict(extra="forbid")

    subscription_id: Optional[str] = None
    default_location: Optional[str] = None
    polling_interval_seconds: int = Field(default=30, gt=0)
    operation_timeout_seconds: Optional[int] = Field(default=None, gt=0)


class LoggingConfig(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="forbid")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    console_enabled: bool = True

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure level is a standard logging level name."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}")
        return level


class ProvisioningConfig(BaseModel):
    """Provisioning run settings."""

    model_config = ConfigDict(extra="forbid")

    max_detached_workers: int = Field(default=4, gt=0)


class AppConfig(BaseModel):
    """Top-level application configuration."""

    model_config = ConfigDict(extra="forbid")

    azure: AzureConfig = Field(default_factory=AzureConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    provisioning: ProvisioningConfig = Field(default_factory=ProvisioningConfig)
