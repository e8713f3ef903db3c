"""Utilities for locating the runtime data directory."""

from __future__ import annotations

import os
from pathlib import Path

_ENV_VAR = "PRISMIC_READER_DATA_DIR"
_DEFAULT_DIRNAME = ".prismic_reader"


def get_data_dir() -> Path:
    """Return the configured runtime data directory.

    Honors the PRISMIC_READER_DATA_DIR environment variable; otherwise defaults
    to ~/.prismic_reader on the current platform. Relative overrides resolve
    against the current working directory.
    """
    override = os.getenv(_ENV_VAR)
    if override is not None and override.strip():
        return Path(override.strip()).expanduser().resolve()
    return (Path.home() / _DEFAULT_DIRNAME).resolve()


def ensure_data_dir() -> Path:
    """Ensure the data directory exists on disk and return it."""
    data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def default_config_path() -> Path:
    """Location of config.yaml inside the data directory."""
    return get_data_dir() / "config" / "config.yaml"


__all__ = [
    "get_data_dir",
    "ensure_data_dir",
    "default_config_path",
]
