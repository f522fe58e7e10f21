from __future__ import annotations

from PySide6.QtCore import QSettings, QTimer
from PySide6.QtWidgets import QMainWindow, QSplitter

from quicknotes.app_settings import SettingsKeys, get_int_list
from quicknotes.logging_setup import get_logger

log = get_logger("ui.state")


class UiStateStore:
    """Window geometry and splitter sizes in QSettings, saved with a debounce."""

    def __init__(self, *, owner: QMainWindow, settings: QSettings, debounce_ms: int = 400):
        self._owner = owner
        self._settings = settings
        self._restoring = False
        self._timer = QTimer(owner)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(debounce_ms))
        self._timer.timeout.connect(self.save)

    def schedule_save(self) -> None:
        if not self._restoring:
            self._timer.start()

    def restore(self, *, splitter: QSplitter) -> None:
        self._restoring = True
        try:
            geo = self._settings.value(SettingsKeys.UI_GEOMETRY)
            if geo:
                self._owner.restoreGeometry(geo)
            else:
                self._owner.resize(900, 700)

            st = self._settings.value(SettingsKeys.UI_STATE)
            if st:
                self._owner.restoreState(st)

            sizes = get_int_list(self._settings, SettingsKeys.UI_SPLITTER)
            if sizes:
                splitter.setSizes(sizes)
        except Exception:
            log.exception("Failed to restore UI state from QSettings")
        finally:
            self._restoring = False

    def save(self, *, splitter: QSplitter | None = None) -> None:
        self._timer.stop()
        try:
            self._settings.setValue(SettingsKeys.UI_GEOMETRY, self._owner.saveGeometry())
            self._settings.setValue(SettingsKeys.UI_STATE, self._owner.saveState())
            splitter = splitter or getattr(self._owner, "splitter", None)
            if splitter is not None:
                self._settings.setValue(SettingsKeys.UI_SPLITTER, splitter.sizes())
        except Exception:
            log.exception("Failed to save UI state to QSettings")
