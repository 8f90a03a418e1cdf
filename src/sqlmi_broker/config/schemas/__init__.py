"""Configuration schemas."""

from sqlmi_broker.config.schemas.app_schema import (
    AppConfig,
    AzureConfig,
    LoggingConfig,
    ProvisioningConfig,
)

__all__: list[str] = ["AppConfig", "AzureConfig", "LoggingConfig", "ProvisioningConfig"]
