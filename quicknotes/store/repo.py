from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from quicknotes.core.errors import PersistenceError
from quicknotes.core.models import Note
from quicknotes.logging_setup import get_logger
from quicknotes.store.filesystem import atomic_write_text, write_recovery_copy

log = get_logger("store")


def dump_notes(notes: Iterable[Note]) -> str:
    return json.dumps([n.to_dict() for n in notes], indent=2, ensure_ascii=False) + "\n"


def parse_notes(text: str) -> list[Note]:
    """Raises ValueError when text is not a JSON array of note objects."""
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array of notes, got {type(data).__name__}")
    return [Note.from_dict(item) for item in data]


class NotesStore:
    """The whole notes collection as one JSON document on disk."""

    def __init__(self, notes_path: Path, *, recovery_dir: Path | None = None):
        self.notes_path = Path(notes_path)
        self.recovery_dir = Path(recovery_dir) if recovery_dir is not None else None

    @property
    def path(self) -> Path:
        return self.notes_path

    def load(self) -> list[Note]:
        path = self.notes_path
        if not path.exists():
            log.info("Notes file absent, starting empty: %s", path)
            return []
        try:
            notes = parse_notes(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            log.exception("Failed to load notes: %s", path)
            raise PersistenceError("Failed to load notes", path=path) from e
        log.info("Loaded %d notes from %s", len(notes), path)
        return notes

    def save(self, notes: Iterable[Note]) -> None:
        notes = list(notes)
        path = self.notes_path
        try:
            atomic_write_text(path, dump_notes(notes))
        except (OSError, ValueError) as e:
            # UnicodeEncodeError: lone surrogates survive json.loads but not utf-8
            log.exception("Failed to save notes: %s", path)
            raise PersistenceError("Failed to save notes", path=path) from e
        log.info("Saved %d notes to %s", len(notes), path)

    def save_recovery_copy(self, notes: Iterable[Note]) -> Path | None:
        """Never raises: this runs after a save has already failed."""
        if self.recovery_dir is None:
            return None
        try:
            rec = write_recovery_copy(self.recovery_dir, self.notes_path.stem, dump_notes(notes))
        except (OSError, ValueError):
            log.exception("Failed to write recovery copy into %s", self.recovery_dir)
            return None
        log.warning("Recovery copy written: %s", rec)
        return rec
