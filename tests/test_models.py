import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from datetime import datetime, timezone

import pytest

from quicknotes.core.models import EPOCH, Note, format_timestamp, parse_timestamp


def test_timestamp_format_matches_iso_with_millis():
    dt = datetime(2026, 10, 19, 8, 15, 2, 123456, tzinfo=timezone.utc)
    assert format_timestamp(dt) == "2026-10-19T08:15:02.123Z"


def test_parse_timestamp_accepts_z_and_offset():
    a = parse_timestamp("2026-10-19T08:15:02.123Z")
    b = parse_timestamp("2026-10-19T10:15:02.123+02:00")
    assert a == b
    assert a.tzinfo is not None


def test_new_note_has_no_updated_at_in_json():
    note = Note(id=1, created_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
    assert note.to_dict() == {
        "id": 1,
        "title": "",
        "content": "",
        "createdAt": "2026-01-01T00:00:00.000Z",
    }


def test_from_dict_reads_camel_case_fields():
    note = Note.from_dict({
        "id": 1760000000000,
        "title": "Alpha",
        "content": "x",
        "createdAt": "2026-01-01T00:00:00.000Z",
        "updatedAt": "2026-01-02T00:00:00.500Z",
    })
    assert note.id == 1760000000000
    assert note.title == "Alpha"
    assert note.updated_at == datetime(2026, 1, 2, 0, 0, 0, 500000, tzinfo=timezone.utc)
    assert note.last_edited == note.updated_at


def test_from_dict_defaults():
    note = Note.from_dict({"id": 3})
    assert note.title == ""
    assert note.content == ""
    assert note.created_at == EPOCH
    assert note.updated_at is None


def test_in_memory_timestamps_keep_only_millis():
    note = Note(id=1, created_at=datetime(2026, 1, 1, 0, 0, 0, 123999, tzinfo=timezone.utc))
    assert note.created_at.microsecond == 123000
    assert Note.from_dict(note.to_dict()) == note


@pytest.mark.parametrize("data", [
    [],
    "note",
    {"title": "no id"},
    {"id": "1"},
    {"id": True},
    {"id": 1, "title": 5},
    {"id": 1, "createdAt": "yesterday"},
])
def test_from_dict_rejects_invalid(data):
    with pytest.raises(ValueError):
        Note.from_dict(data)
