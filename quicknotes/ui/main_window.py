from __future__ import annotations

from PySide6.QtCore import QSettings, Qt, Slot
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem, QMainWindow,
    QMessageBox, QPlainTextEdit, QPushButton, QSplitter, QVBoxLayout, QWidget,
)

from quicknotes.core.search import display_date, display_title, empty_list_message, preview
from quicknotes.logging_setup import get_logger
from quicknotes.session.controller import NoteSession, SessionStatus
from quicknotes.settings import APP_NAME
from quicknotes.ui.qt_utils import blocked_signals, set_text_if_changed
from quicknotes.ui.ui_state import UiStateStore

log = get_logger("ui")


class MainWindow(QMainWindow):
    """Sidebar + editor. Holds no note state of its own: everything comes from the session."""

    def __init__(self, session: NoteSession, *, settings: QSettings | None = None):
        super().__init__()
        self.session = session
        self._row_ids: list[int] = []
        self.setWindowTitle(APP_NAME)
        self.setMinimumSize(600, 400)

        # ---- sidebar ----
        self.btn_new = QPushButton("+")
        self.btn_new.setToolTip("New Note (Ctrl+N)")
        header = QHBoxLayout()
        header.addWidget(QLabel("<h2>Notes</h2>"))
        header.addStretch(1)
        header.addWidget(self.btn_new)

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search notes...")
        self.search.setClearButtonEnabled(True)

        self.listw = QListWidget()
        self.empty_label = QLabel()
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.btn_create_first = QPushButton("Create your first note")

        left = QWidget()
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(8, 8, 8, 8)
        left_layout.addLayout(header)
        left_layout.addWidget(self.search)
        left_layout.addWidget(self.listw, 1)
        left_layout.addWidget(self.empty_label)
        left_layout.addWidget(self.btn_create_first)

        # ---- editor ----
        self.error_label = QLabel()
        self.btn_dismiss = QPushButton("×")
        self.btn_dismiss.setFlat(True)
        banner = QWidget()
        banner_layout = QHBoxLayout(banner)
        banner_layout.setContentsMargins(8, 4, 8, 4)
        banner_layout.addWidget(self.error_label, 1)
        banner_layout.addWidget(self.btn_dismiss)
        banner.setStyleSheet("background: #5c1f1f; color: white;")
        self.error_banner = banner

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Title")
        self.content_edit = QPlainTextEdit()
        self.content_edit.setPlaceholderText("Start typing...")

        self.meta_label = QLabel()
        self.btn_delete = QPushButton("Delete Note")
        self.btn_delete.setToolTip("Delete Note (Ctrl+Backspace)")
        footer = QHBoxLayout()
        footer.addWidget(self.meta_label, 1)
        footer.addWidget(self.btn_delete)

        self.placeholder_label = QLabel()
        self.placeholder_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.btn_new_empty = QPushButton("New Note")
        self.placeholder = QWidget()
        placeholder_layout = QVBoxLayout(self.placeholder)
        placeholder_layout.addStretch(1)
        placeholder_layout.addWidget(self.placeholder_label)
        placeholder_layout.addWidget(self.btn_new_empty, 0, Qt.AlignmentFlag.AlignHCenter)
        placeholder_layout.addStretch(1)

        self.editor = QWidget()
        editor_layout = QVBoxLayout(self.editor)
        editor_layout.addWidget(self.title_edit)
        editor_layout.addWidget(self.content_edit, 1)
        editor_layout.addLayout(footer)

        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.addWidget(self.error_banner)
        right_layout.addWidget(self.placeholder, 1)
        right_layout.addWidget(self.editor, 1)

        self.splitter = QSplitter(Qt.Orientation.Horizontal)
        self.splitter.addWidget(left)
        self.splitter.addWidget(right)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 3)
        self.setCentralWidget(self.splitter)

        self.saving_label = QLabel()
        self.statusBar().addPermanentWidget(self.saving_label)

        self._build_actions()

        # Signals: widgets -> session commands
        self.btn_new.clicked.connect(self.session.create_note)
        self.btn_create_first.clicked.connect(self.session.create_note)
        self.btn_new_empty.clicked.connect(self.session.create_note)
        self.btn_delete.clicked.connect(self.session.request_delete)
        self.btn_dismiss.clicked.connect(self.session.dismiss_error)
        self.search.textChanged.connect(self.session.search)
        self.listw.currentRowChanged.connect(self._on_row_changed)
        self.title_edit.textChanged.connect(self.session.update_title)
        self.content_edit.textChanged.connect(
            lambda: self.session.update_content(self.content_edit.toPlainText())
        )

        # session -> view
        self.session.changed.connect(self.render)
        self.session.saving_changed.connect(self._render_saving)
        self.session.focus_title_requested.connect(self.title_edit.setFocus)
        self.session.delete_requested.connect(self._confirm_delete)

        self.ui_state = UiStateStore(owner=self, settings=settings if settings is not None else QSettings())
        self.ui_state.restore(splitter=self.splitter)
        self.splitter.splitterMoved.connect(lambda *_: self.ui_state.schedule_save())

        self.render()

    def _build_actions(self) -> None:
        def add(text: str, shortcut: str, slot) -> None:
            act = QAction(text, self)
            act.setShortcut(QKeySequence(shortcut))
            act.triggered.connect(slot)
            self.addAction(act)

        add("New Note", "Ctrl+N", self.session.create_note)
        add("Search", "Ctrl+F", self.search.setFocus)
        add("Delete Note", "Ctrl+Backspace", self.session.request_delete)
        add("Save", "Ctrl+S", self.session.save_now)

    # ───────────────────────── rendering ─────────────────────────

    @Slot()
    def render(self) -> None:
        s = self.session.state
        self._render_list()

        note = self.session.selected_note()
        self.editor.setVisible(note is not None)
        self.placeholder.setVisible(note is None)
        loading = self.session.status is SessionStatus.LOADING
        self.placeholder_label.setText("Loading notes..." if loading else "Select a note or create a new one")
        self.btn_new_empty.setVisible(not loading)
        set_text_if_changed(self.title_edit, s.edit_title)
        set_text_if_changed(self.content_edit, s.edit_content)
        if note is not None and note.updated_at is not None:
            self.meta_label.setText(f"Last edited: {note.updated_at.astimezone():%c}")
        else:
            self.meta_label.clear()

        self.error_banner.setVisible(bool(s.error_message))
        self.error_label.setText(s.error_message or "")
        self._render_saving(s.saving)

    def _render_list(self) -> None:
        s = self.session.state
        notes = self.session.visible_notes()
        self._row_ids = [n.id for n in notes]
        with blocked_signals(self.listw):
            self.listw.clear()
            for n in notes:
                item = QListWidgetItem(f"{display_title(n)}\n{preview(n)}\n{display_date(n)}")
                self.listw.addItem(item)
                if n.id == s.selected_id:
                    item.setSelected(True)
                    self.listw.setCurrentItem(item)
        loading = self.session.status is SessionStatus.LOADING
        self.empty_label.setVisible(not notes and not loading)
        self.empty_label.setText(empty_list_message(s.search_query))
        self.btn_create_first.setVisible(not notes and not loading and not s.search_query)

    @Slot(bool)
    def _render_saving(self, saving: bool) -> None:
        busy = saving or self.session.state.dirty
        self.saving_label.setText("Saving..." if busy else "")

    # ───────────────────────── handlers ─────────────────────────

    @Slot(int)
    def _on_row_changed(self, row: int) -> None:
        if 0 <= row < len(self._row_ids):
            self.session.select_note(self._row_ids[row])

    @Slot()
    def _confirm_delete(self) -> None:
        answer = QMessageBox.question(
            self,
            "Delete Note",
            "Are you sure you want to delete this note? This action cannot be undone.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.Cancel,
            QMessageBox.StandardButton.Cancel,
        )
        if answer == QMessageBox.StandardButton.Yes and self.session.state.pending_delete:
            self.session.confirm_delete()
        else:
            self.session.cancel_delete()

    def closeEvent(self, event):  # type: ignore[override]
        """Write the pending edit before the window goes away."""
        try:
            self.session.close()
            self.ui_state.save(splitter=self.splitter)
        except Exception:
            log.exception("Failed to flush session on close")
        super().closeEvent(event)
