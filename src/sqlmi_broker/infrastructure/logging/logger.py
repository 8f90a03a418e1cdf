"""Application logging setup."""

import logging
import os
import sys
from typing import Optional

from sqlmi_broker.config.schemas.app_schema import LoggingConfig

ROOT_LOGGER_NAME = "sqlmi_broker"

_configured = False


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the package root logger.

    Console output goes to stderr so command results on stdout stay parseable.
    Calling this again replaces the handlers installed by the previous call.
    """
    global _configured
    config = config or LoggingConfig()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if config.file_path:
        log_dir = os.path.dirname(config.file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(config.file_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    root.propagate = False
    _configured = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package root logger."""
    if not _configured:
        setup_logging()
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
