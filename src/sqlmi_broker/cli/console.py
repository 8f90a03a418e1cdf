"""Shared Rich console for CLI output."""

import json
import os
from functools import wraps
from typing import Any

from rich.console import Console

_error_console = Console(stderr=True)


def _should_print() -> bool:
    """Check if console output is enabled."""
    return os.environ.get("SQLMI_CONSOLE_ENABLED", "true").lower() == "true"


def _console_output(func):
    """Decorator to check if console output is enabled."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if _should_print():
            return func(*args, **kwargs)

    return wrapper


@_console_output
def print_success(message: str):
    _error_console.print(f"[green]{message}[/green]")


@_console_output
def print_error(message: str):
    _error_console.print(f"[red]{message}[/red]")


def print_json(data: dict[str, Any]):
    """Print JSON data to stdout (always outputs, ignores SQLMI_CONSOLE_ENABLED)."""
    print(json.dumps(data, indent=2, default=str))
