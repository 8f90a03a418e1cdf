"""Logging infrastructure."""

from sqlmi_broker.infrastructure.logging.logger import get_logger, setup_logging

__all__: list[str] = ["get_logger", "setup_logging"]
