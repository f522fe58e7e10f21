from .repo import NotesStore

__all__ = ["NotesStore"]
