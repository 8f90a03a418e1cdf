"""Configuration loading with file discovery and environment overrides."""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from sqlmi_broker.config.platform_dirs import LOG_DIR_ENV, get_config_location, get_logs_location
from sqlmi_broker.config.schemas.app_schema import AppConfig, LoggingConfig
from sqlmi_broker.domain.base.exceptions import ConfigurationError

CONFIG_FILE_ENV = "SQLMI_CONFIG_FILE"
CONFIG_FILE_NAMES = ("config.yaml", "config.yml", "config.json")
DEFAULT_LOG_FILE_NAME = "sqlmi.log"

# environment variable -> (section, key)
ENV_OVERRIDES = {
    "AZURE_SUBSCRIPTION_ID": ("azure", "subscription_id"),
    "SQLMI_DEFAULT_LOCATION": ("azure", "default_location"),
    "SQLMI_LOG_LEVEL": ("logging", "level"),
    "SQLMI_LOG_FILE": ("logging", "file_path"),
}


class ConfigurationManager:
    """Loads AppConfig from YAML or JSON and applies environment overrides."""

    def __init__(self, config_file: Optional[str] = None) -> None:
        self._explicit_file = config_file
        self._config: Optional[AppConfig] = None

    def resolve_config_file(self) -> Optional[Path]:
        """Locate the config file; None means defaults only."""
        explicit = self._explicit_file or os.environ.get(CONFIG_FILE_ENV)
        if explicit:
            path = Path(explicit)
            if not path.is_file():
                raise ConfigurationError(
                    f"Configuration file not found: {path}", {"path": str(path)}
                )
            return path

        config_dir = get_config_location()
        for name in CONFIG_FILE_NAMES:
            candidate = config_dir / name
            if candidate.is_file():
                return candidate
        return None

    def load(self) -> AppConfig:
        """Load, validate and cache the configuration."""
        path = self.resolve_config_file()
        data = self._read_file(path) if path else {}
        self._apply_env_overrides(data)

        try:
            self._config = AppConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                {"path": str(path) if path else None},
            ) from e
        self._resolve_log_file(self._config.logging)
        return self._config

    def get_config(self) -> AppConfig:
        if self._config is None:
            return self.load()
        return self._config

    @staticmethod
    def _read_file(path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in configuration file {path}: {e}",
                {"path": str(path), "line": e.lineno},
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file {path}: {e}", {"path": str(path)}
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping", {"path": str(path)}
            )
        return data

    @staticmethod
    def _apply_env_overrides(data: dict[str, Any]) -> None:
        for env_var, (section, key) in ENV_OVERRIDES.items():
            value = os.environ.get(env_var)
            if value:
                section_data = data.get(section) or {}
                section_data[key] = value
                data[section] = section_data

    @staticmethod
    def _resolve_log_file(logging_config: LoggingConfig) -> None:
        """
        Anchor relative log files in the logs directory.

        Setting SQLMI_LOG_DIR without a file_path turns on file logging to
        sqlmi.log in that directory.
        """
        file_path = logging_config.file_path
        if not file_path:
            if not os.environ.get(LOG_DIR_ENV):
                return
            file_path = DEFAULT_LOG_FILE_NAME

        path = Path(file_path)
        if not path.is_absolute():
            path = get_logs_location() / path
        logging_config.file_path = str(path)
