from .errors import PersistenceError
from .ids import NoteIdSource
from .models import Note
from .search import filter_notes, matches

__all__ = ["Note", "NoteIdSource", "PersistenceError", "filter_notes", "matches"]
