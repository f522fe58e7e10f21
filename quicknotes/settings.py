from __future__ import annotations

from pathlib import Path

APP_NAME = "quicknotes"
ORG_NAME = "quicknotes"

AUTOSAVE_DEBOUNCE_MS = 500
NOTES_FILENAME = "notes.json"


def data_dir() -> Path:
    """
    Per-user application data directory.

    Qt knows the platform convention (AppData on Windows, Application Support
    on macOS, XDG on Linux); fall back to ~/.quicknotes when it is unavailable.
    """
    try:
        from PySide6.QtCore import QStandardPaths

        loc = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
        if loc:
            return Path(loc) / APP_NAME
    except Exception:
        pass
    return Path.home() / f".{APP_NAME}"


def notes_path() -> Path:
    return data_dir() / NOTES_FILENAME


def log_dir() -> Path:
    return data_dir() / "logs"


def log_path() -> Path:
    return log_dir() / f"{APP_NAME}.log"


def recovery_dir() -> Path:
    return data_dir() / "recovery"
