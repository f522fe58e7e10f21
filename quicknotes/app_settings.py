from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QSettings


@dataclass(frozen=True)
class SettingsKeys:
    UI_GEOMETRY: str = "ui/geometry"
    UI_STATE: str = "ui/windowState"
    UI_SPLITTER: str = "ui/splitter_sizes"


def get_int_list(settings: QSettings, key: str) -> list[int] | None:
    """QSettings returns lists, strings like "200,800" or None depending on backend."""
    value = settings.value(key)
    if value is None:
        return None
    if isinstance(value, str):
        value = value.replace(",", " ").split()
    if not isinstance(value, (list, tuple)):
        return None
    out: list[int] = []
    for x in value:
        try:
            out.append(int(x))
        except (TypeError, ValueError):
            pass
    return out or None
