from __future__ import annotations

from typing import Iterable

from .models import Note

UNTITLED = "Untitled"
NO_CONTENT = "No content"
PREVIEW_CHARS = 60


def matches(note: Note, query: str) -> bool:
    if not query:
        return True
    q = query.casefold()
    return q in note.title.casefold() or q in note.content.casefold()


def filter_notes(notes: Iterable[Note], query: str) -> list[Note]:
    """Case-insensitive substring filter over title and content, order kept."""
    return [n for n in notes if matches(n, query)]


def display_title(note: Note) -> str:
    return note.title or UNTITLED


def preview(note: Note, limit: int = PREVIEW_CHARS) -> str:
    return note.content[:limit] or NO_CONTENT


def display_date(note: Note) -> str:
    return note.last_edited.astimezone().strftime("%x")


def empty_list_message(query: str) -> str:
    return "No notes found" if query else "No notes yet"
