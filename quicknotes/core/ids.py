from __future__ import annotations

import time
from typing import Callable, Iterable


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class NoteIdSource:
    """
    Millisecond-timestamp ids that never repeat.

    Two notes created within the same millisecond (or after the clock steps
    back) get last + 1 instead of a duplicate.
    """

    def __init__(self, clock_ms: Callable[[], int] | None = None):
        self._clock_ms = clock_ms or _wall_clock_ms
        self._last = 0

    @property
    def last(self) -> int:
        return self._last

    def observe(self, ids: Iterable[int]) -> None:
        for i in ids:
            if i > self._last:
                self._last = i

    def next_id(self) -> int:
        self._last = max(int(self._clock_ms()), self._last + 1)
        return self._last
