from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2026-10-19T08:15:02.123Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str) or not value:
        raise ValueError(f"invalid timestamp: {value!r}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _truncate_ms(dt: datetime) -> datetime:
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


@dataclass
class Note:
    id: int
    title: str = ""
    content: str = ""
    created_at: datetime = EPOCH
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        # Stored timestamps only keep milliseconds; keep memory identical to disk.
        self.created_at = _truncate_ms(self.created_at)
        if self.updated_at is not None:
            self.updated_at = _truncate_ms(self.updated_at)

    def touch(self, when: datetime) -> None:
        """Stamp updated_at with the precision the file keeps."""
        self.updated_at = _truncate_ms(when)

    @property
    def last_edited(self) -> datetime:
        return self.updated_at or self.created_at

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": format_timestamp(self.created_at),
        }
        if self.updated_at is not None:
            data["updatedAt"] = format_timestamp(self.updated_at)
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Note":
        """Raises ValueError on anything that is not a note object."""
        if not isinstance(data, dict):
            raise ValueError(f"note must be an object, got {type(data).__name__}")

        note_id = data.get("id")
        if isinstance(note_id, bool) or not isinstance(note_id, int):
            raise ValueError(f"note id must be an integer, got {note_id!r}")

        title = data.get("title", "")
        content = data.get("content", "")
        if not isinstance(title, str) or not isinstance(content, str):
            raise ValueError(f"note {note_id}: title and content must be strings")

        created = data.get("createdAt")
        updated = data.get("updatedAt")
        return cls(
            id=note_id,
            title=title,
            content=content,
            created_at=parse_timestamp(created) if created is not None else EPOCH,
            updated_at=parse_timestamp(updated) if updated is not None else None,
        )
