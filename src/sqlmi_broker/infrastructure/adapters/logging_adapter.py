"""LoggingPort implementation backed by the standard library logger."""

import logging
from typing import Any, Optional

from sqlmi_broker.domain.base.ports.logging_port import LoggingPort
from sqlmi_broker.infrastructure.logging.logger import get_logger


class LoggingAdapter(LoggingPort):
    """
    Adapter that implements LoggingPort on top of ``logging``.

    ``context`` is rendered in front of every message, e.g. ``[job=job-1]``.
    """

    def __init__(self, name: str = "application", context: Optional[dict[str, Any]] = None) -> None:
        self._logger = get_logger(name)
        self._name = name
        self._context = dict(context or {})
        self._prefix = "".join(f"[{k}={v}] " for k, v in self._context.items())

    def with_context(self, **context: Any) -> "LoggingAdapter":
        """Return an adapter for the same logger with extra context."""
        return LoggingAdapter(self._name, {**self._context, **context})

    def _log(self, level: int, message: str, args: tuple, kwargs: dict[str, Any]) -> None:
        # stacklevel 3 skips _log and the public method
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, self._prefix + message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, args, kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, message, args, kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, args, kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, args, kwargs)

    def critical(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, args, kwargs)

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, message, args, kwargs)
