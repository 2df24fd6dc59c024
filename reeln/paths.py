"""Platform-appropriate locations for configuration and data files."""

from __future__ import annotations

import os
from pathlib import Path

import platformdirs

_APP_NAME = "reeln"


def config_dir() -> Path:
    """Return the configuration directory, e.g. ``~/.config/reeln`` on Linux."""
    return platformdirs.user_config_path() / _APP_NAME


def data_dir() -> Path:
    """Return the data directory, e.g. ``~/.local/share/reeln`` on Linux."""
    return platformdirs.user_data_path() / _APP_NAME


def default_config_path(profile: str | None = None) -> Path:
    """Return ``<config_dir>/config.json``, or ``config.<profile>.json`` for a profile."""
    name = "config.json" if profile is None else f"config.{profile}.json"
    return config_dir() / name


def resolve_config_path(
    path: str | os.PathLike[str] | None = None, profile: str | None = None
) -> Path:
    """Use ``path`` when given, otherwise the default path for ``profile``."""
    if path is not None:
        return Path(path)
    return default_config_path(profile)