from __future__ import annotations

from pathlib import Path


class PersistenceError(Exception):
    """The notes file could not be read, parsed or written."""

    def __init__(self, message: str, *, path: Path | None = None):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{msg}: {self.path}" if self.path is not None else msg
