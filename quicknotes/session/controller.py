from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from quicknotes.core.errors import PersistenceError
from quicknotes.core.ids import NoteIdSource
from quicknotes.core.models import Note, utc_now
from quicknotes.core.search import filter_notes
from quicknotes.logging_setup import get_logger
from quicknotes.settings import AUTOSAVE_DEBOUNCE_MS
from quicknotes.store.repo import NotesStore

log = get_logger("session")

LOAD_ERROR = "Failed to load notes"
CREATE_ERROR = "Failed to save notes"
SAVE_ERROR = "Failed to save note"
DELETE_ERROR = "Failed to delete note"


class Phase(Enum):
    LOADING = "loading"
    READY = "ready"


class SessionStatus(Enum):
    LOADING = "loading"
    IDLE = "idle"
    EDITING = "editing"
    SAVING = "saving"
    CONFIRM_DELETE = "confirm_delete"
    ERROR = "error"


@dataclass
class SessionState:
    phase: Phase = Phase.LOADING
    notes: list[Note] = field(default_factory=list)
    selected_id: int | None = None
    edit_title: str = ""
    edit_content: str = ""
    search_query: str = ""
    saving: bool = False
    dirty: bool = False
    pending_delete: bool = False
    error_message: str | None = None


class NoteSession(QObject):
    """
    Owns every piece of in-memory note state and decides when to persist.

    Edits go to memory immediately and reach disk after a quiet period of
    debounce_ms; create and delete are written at once. The presentation
    layer calls the command methods and re-renders on `changed`.
    """

    changed = Signal()
    saving_changed = Signal(bool)
    error_changed = Signal(str)
    focus_title_requested = Signal()
    delete_requested = Signal()

    def __init__(
        self,
        store: NotesStore,
        *,
        timer: QTimer | None = None,
        clock: Callable[[], datetime] | None = None,
        ids: NoteIdSource | None = None,
        debounce_ms: int = AUTOSAVE_DEBOUNCE_MS,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._store = store
        self._clock = clock or utc_now
        self._ids = ids or NoteIdSource(lambda: int(self._clock().timestamp() * 1000))
        self.state = SessionState()

        # Note the pending autosave belongs to; the selection may move on
        # before the timer fires.
        self._pending_id: int | None = None
        self._last_save_failed = False

        self._timer = timer if timer is not None else QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(debounce_ms))
        self._timer.timeout.connect(self.flush_save)

    # ───────────────────────── queries ─────────────────────────

    @property
    def status(self) -> SessionStatus:
        s = self.state
        if s.phase is Phase.LOADING:
            return SessionStatus.LOADING
        if s.saving:
            return SessionStatus.SAVING
        if s.pending_delete:
            return SessionStatus.CONFIRM_DELETE
        if s.error_message:
            return SessionStatus.ERROR
        if s.selected_id is not None:
            return SessionStatus.EDITING
        return SessionStatus.IDLE

    @property
    def save_pending(self) -> bool:
        return self._timer.isActive()

    def selected_note(self) -> Note | None:
        return self._find(self.state.selected_id)

    def visible_notes(self) -> list[Note]:
        return filter_notes(self.state.notes, self.state.search_query)

    # ───────────────────────── commands ─────────────────────────

    def load_session(self) -> None:
        self._timer.stop()
        self._pending_id = None
        s = self.state
        s.phase = Phase.LOADING
        error = None
        try:
            notes = self._store.load()
        except PersistenceError:
            log.warning("Starting with an empty collection: store unreadable")
            notes, error = [], LOAD_ERROR

        self._ids.observe(n.id for n in notes)
        s.notes = notes
        s.selected_id = None
        s.edit_title = s.edit_content = ""
        s.dirty = s.pending_delete = False
        s.phase = Phase.READY
        self._set_error(error)
        log.info("Session ready: notes=%d", len(notes))
        self.changed.emit()

    def create_note(self) -> Note:
        self._flush_before_switch(None)

        note = Note(id=self._ids.next_id(), created_at=self._clock())
        s = self.state
        s.notes.insert(0, note)
        s.selected_id = note.id
        s.edit_title = s.edit_content = ""
        s.pending_delete = False
        log.info("Note created: id=%s", note.id)

        self._persist(CREATE_ERROR)
        self.changed.emit()
        self.focus_title_requested.emit()
        return note

    def select_note(self, note_id: int) -> bool:
        note = self._find(note_id)
        if note is None:
            log.debug("select_note: unknown id=%s", note_id)
            return False

        self._flush_before_switch(note_id)

        s = self.state
        s.selected_id = note.id
        s.edit_title = note.title
        s.edit_content = note.content
        s.pending_delete = False
        self._set_error(None)
        self.changed.emit()
        return True

    def update_title(self, text: str) -> bool:
        return self._edit(title=text)

    def update_content(self, text: str) -> bool:
        return self._edit(content=text)

    def flush_save(self) -> bool:
        """Debounce timer callback: stamp the edited note and write everything."""
        note_id = self._pending_id
        if note_id is None:
            return False

        note = self._find(note_id)
        if note is None:
            log.debug("Autosave skipped: note %s no longer exists", note_id)
            self._pending_id = None
            self.state.dirty = False
            return False

        note.touch(self._clock())
        ok = self._persist(SAVE_ERROR)
        if ok:
            self._pending_id = None
            self.state.dirty = False
        else:
            self._store.save_recovery_copy(self.state.notes)
        self.changed.emit()
        return ok

    def save_now(self) -> bool:
        """Explicit save, also the retry after a failed autosave."""
        self._timer.stop()
        if self._pending_id is not None:
            return self.flush_save()
        if not self._last_save_failed:
            return True
        ok = self._persist(SAVE_ERROR)
        self.changed.emit()
        return ok

    def request_delete(self) -> bool:
        if self.state.selected_id is None:
            return False
        self.state.pending_delete = True
        self.changed.emit()
        self.delete_requested.emit()
        return True

    def cancel_delete(self) -> None:
        if not self.state.pending_delete:
            return
        self.state.pending_delete = False
        self.changed.emit()

    def confirm_delete(self) -> bool:
        s = self.state
        note_id = s.selected_id
        if not s.pending_delete or note_id is None:
            s.pending_delete = False
            return False

        self._timer.stop()
        if self._pending_id == note_id:
            self._pending_id = None

        s.notes = [n for n in s.notes if n.id != note_id]
        s.selected_id = None
        s.edit_title = s.edit_content = ""
        s.pending_delete = False
        log.info("Note deleted: id=%s", note_id)

        if self._persist(DELETE_ERROR):
            self._pending_id = None
        s.dirty = self._pending_id is not None
        self.changed.emit()
        return True

    def search(self, query: str) -> list[Note]:
        if query != self.state.search_query:
            self.state.search_query = query
            self.changed.emit()
        return self.visible_notes()

    def clear_search(self) -> None:
        self.search("")

    def dismiss_error(self) -> None:
        if self._set_error(None):
            self.changed.emit()

    def close(self) -> None:
        """Session teardown: no timer may fire afterwards, pending edits are written now."""
        self._timer.stop()
        if self._pending_id is not None:
            log.info("Flush-save on close: id=%s", self._pending_id)
            self.flush_save()

    # ───────────────────────── internals ─────────────────────────

    def _find(self, note_id: int | None) -> Note | None:
        if note_id is None:
            return None
        for n in self.state.notes:
            if n.id == note_id:
                return n
        return None

    def _edit(self, *, title: str | None = None, content: str | None = None) -> bool:
        note = self.selected_note()
        if note is None:
            return False

        s = self.state
        if title is not None:
            s.edit_title = note.title = title
        if content is not None:
            s.edit_content = note.content = content

        self._pending_id = note.id
        s.dirty = True
        self._timer.start()
        self.changed.emit()
        return True

    def _flush_before_switch(self, next_id: int | None) -> None:
        # Switching notes must not leave another note's edit waiting on the timer.
        if self._pending_id is None or self._pending_id == next_id:
            return
        self._timer.stop()
        self.flush_save()

    def _persist(self, error_message: str) -> bool:
        self._set_saving(True)
        try:
            self._store.save(self.state.notes)
        except PersistenceError:
            log.warning("%s (in-memory state kept)", error_message)
            self._last_save_failed = True
            self._set_error(error_message)
            return False
        finally:
            self._set_saving(False)

        if self._last_save_failed:
            self._last_save_failed = False
            self._set_error(None)
        return True

    def _set_saving(self, flag: bool) -> None:
        self.state.saving = flag
        self.saving_changed.emit(flag)

    def _set_error(self, message: str | None) -> bool:
        if message == self.state.error_message:
            return False
        self.state.error_message = message
        self.error_changed.emit(message or "")
        return True
