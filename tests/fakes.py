from __future__ import annotations

from datetime import datetime, timedelta, timezone

from PySide6.QtCore import QObject, Signal

from quicknotes.core.errors import PersistenceError
from quicknotes.store.repo import NotesStore

START = datetime(2026, 10, 19, 8, 0, 0, tzinfo=timezone.utc)


class FakeTimer(QObject):
    """Single-shot QTimer stand-in driven by FakeClock.advance()."""

    timeout = Signal()

    def __init__(self, clock: "FakeClock"):
        super().__init__()
        self._clock = clock
        self._interval = 0
        self.deadline: int | None = None
        self.starts = 0

    def setSingleShot(self, single: bool) -> None:
        assert single

    def setInterval(self, ms: int) -> None:
        self._interval = ms

    def interval(self) -> int:
        return self._interval

    def start(self) -> None:
        self.starts += 1
        self.deadline = self._clock.ms + self._interval

    def stop(self) -> None:
        self.deadline = None

    def isActive(self) -> bool:
        return self.deadline is not None

    def fire(self) -> None:
        self.deadline = None
        self.timeout.emit()


class FakeClock:
    def __init__(self, start: datetime = START):
        self.start = start
        self.ms = 0
        self.timers: list[FakeTimer] = []

    def __call__(self) -> datetime:
        return self.start + timedelta(milliseconds=self.ms)

    def timer(self) -> FakeTimer:
        t = FakeTimer(self)
        self.timers.append(t)
        return t

    def advance(self, ms: int) -> None:
        target = self.ms + ms
        while True:
            due = [t for t in self.timers if t.deadline is not None and t.deadline <= target]
            if not due:
                break
            t = min(due, key=lambda t: t.deadline)
            self.ms = t.deadline
            t.fire()
        self.ms = target


class RecordingStore(NotesStore):
    """Real JSON store that also remembers when and what it was asked to save."""

    def __init__(self, notes_path, *, clock: FakeClock, recovery_dir=None):
        super().__init__(notes_path, recovery_dir=recovery_dir)
        self.clock = clock
        self.saves: list[tuple[int, list[dict]]] = []
        self.fail_saves = False

    def save(self, notes) -> None:
        notes = list(notes)
        self.saves.append((self.clock.ms, [n.to_dict() for n in notes]))
        if self.fail_saves:
            raise PersistenceError("Failed to save notes", path=self.path)
        super().save(notes)

    def saved_ids(self, index: int = -1) -> list[int]:
        return [d["id"] for d in self.saves[index][1]]
