from __future__ import annotations

from contextlib import contextmanager


@contextmanager
def blocked_signals(*objs):
    """Temporarily silence Qt signals, so programmatic updates don't echo back as edits."""
    previous = [obj.blockSignals(True) for obj in objs]
    try:
        yield
    finally:
        for obj, was_blocked in zip(objs, previous):
            obj.blockSignals(was_blocked)


def set_text_if_changed(widget, text: str) -> None:
    """Rewriting identical text would reset the cursor while the user types."""
    current = widget.toPlainText() if hasattr(widget, "toPlainText") else widget.text()
    if current == text:
        return
    with blocked_signals(widget):
        if hasattr(widget, "setPlainText"):
            widget.setPlainText(text)
        else:
            widget.setText(text)
