from __future__ import annotations

import argparse
from pathlib import Path

from PySide6.QtWidgets import QApplication

from quicknotes.logging_setup import SESSION_ID, install_global_exception_hooks, setup_logging
from quicknotes.session.controller import NoteSession
from quicknotes.settings import APP_NAME, ORG_NAME, notes_path, recovery_dir
from quicknotes.store.repo import NotesStore
from quicknotes.ui.main_window import MainWindow


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog=APP_NAME, description="Desktop notes with autosave")
    p.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Path to notes.json (default: per-user application data directory)",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    log = setup_logging()
    install_global_exception_hooks(log)

    app = QApplication([])
    app.setOrganizationName(ORG_NAME)
    app.setApplicationName(APP_NAME)

    path = args.data_file or notes_path()
    store = NotesStore(path, recovery_dir=path.parent / "recovery" if args.data_file else recovery_dir())
    session = NoteSession(store)
    win = MainWindow(session)
    win.show()
    session.load_session()

    log.info("Application started, notes_file=%s SID=%s", store.path, SESSION_ID)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
