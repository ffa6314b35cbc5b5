"""Thin wrapper around QSettings used as the application's key/value store."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6 import QtCore


class KeyValueStore:
    """String values under flat keys, backed by an INI file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._settings = QtCore.QSettings(str(self._path), QtCore.QSettings.Format.IniFormat)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._settings.value(key, default)
        if value is None:
            return default
        if isinstance(value, str):
            return value
        # INI values can come back as string lists when hand-edited.
        return repr(value)

    def set(self, key: str, value: str) -> None:
        self._settings.setValue(key, value)

    def clear(self) -> None:
        self._settings.clear()

    def sync(self) -> None:
        self._settings.sync()


__all__ = ["KeyValueStore"]
