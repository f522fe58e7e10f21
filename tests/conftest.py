import sys
import os

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from fakes import FakeClock, RecordingStore
from quicknotes.session.controller import NoteSession


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(tmp_path, clock):
    return RecordingStore(
        tmp_path / "data" / "notes.json",
        clock=clock,
        recovery_dir=tmp_path / "data" / "recovery",
    )


@pytest.fixture
def session(store, clock):
    s = NoteSession(store, timer=clock.timer(), clock=clock)
    s.load_session()
    return s
