"""Where the broker looks for its config file and writes its log files."""

import os
import sys
from pathlib import Path
from typing import Optional

CONFIG_DIR_ENV = "SQLMI_CONFIG_DIR"
LOG_DIR_ENV = "SQLMI_LOG_DIR"
USER_CONFIG_DIR = Path(".config") / "sqlmi-broker"


def _project_root(start: Path) -> Optional[Path]:
    """Nearest directory at or above ``start`` holding a pyproject.toml."""
    for candidate in (start, *start.parents):
        if (candidate / "pyproject.toml").exists():
            return candidate
    return None


def get_config_location() -> Path:
    """
    Directory searched for config.yaml / config.json.

    Checked in order: ``SQLMI_CONFIG_DIR``, ``config/`` in a source checkout,
    ``~/.config/sqlmi-broker`` for ``pip install --user``, ``config/`` beside
    an active virtualenv, and finally ``./config``.
    """
    if env_dir := os.environ.get(CONFIG_DIR_ENV):
        return Path(env_dir)

    cwd = Path.cwd()
    root = _project_root(cwd)
    if root is not None:
        return root / "config"

    if sys.prefix.startswith(str(Path.home())):
        return Path.home() / USER_CONFIG_DIR

    if sys.prefix != sys.base_prefix:
        return Path(sys.prefix).parent / "config"

    return cwd / "config"


def get_logs_location() -> Path:
    """Directory for relative log file paths: ``SQLMI_LOG_DIR``, else ``logs/`` beside the config dir."""
    if env_dir := os.environ.get(LOG_DIR_ENV):
        return Path(env_dir)
    return get_config_location().parent / "logs"
