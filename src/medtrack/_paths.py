"""Locations of the store, logs and exports on disk."""

from __future__ import annotations

import os
from pathlib import Path

STORE_FILENAME = "medtrack_store.ini"


def app_support_dir() -> Path:
    """Return the application support root, creating it if needed.

    ``MEDTRACK_HOME`` overrides the default macOS-style location.
    """

    override = os.environ.get("MEDTRACK_HOME")
    if override:
        root = Path(override).expanduser()
    else:
        root = Path.home() / "Library" / "Application Support" / "MedTrack"
    root.mkdir(parents=True, exist_ok=True)
    return root


def default_store_path() -> Path:
    """Return the key/value store file; ``MEDTRACK_STORE`` takes precedence."""

    override = os.environ.get("MEDTRACK_STORE")
    if override:
        return Path(override).expanduser()
    return app_support_dir() / STORE_FILENAME


def logs_dir() -> Path:
    path = app_support_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = ["STORE_FILENAME", "app_support_dir", "default_store_path", "logs_dir"]
