from __future__ import annotations

import os
import uuid
from datetime import datetime
from pathlib import Path


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """
    Whole-file overwrite of notes.json (and recovery copies):
    - write to temp file in same directory, creating the directory
    - fsync
    - replace()

    Readers see either the old collection or the new one, never a partial
    write. Encoding errors surface as ValueError, I/O errors as OSError.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    f = None
    try:
        f = open(tmp_path, "w", encoding=encoding, newline="")
        f.write(text)
        f.flush()
        os.fsync(f.fileno())
        f.close()
        f = None

        tmp_path.replace(path)

    finally:
        if f is not None:
            f.close()
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass


def write_recovery_copy(recovery_dir: Path, stem: str, text: str, *, suffix: str = ".json") -> Path:
    """
    Best-effort emergency save when the normal save fails.

    Writes a timestamped copy into recovery_dir, e.g.
      notes.recovery.20261019-081502.json
    """
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    recovery_path = Path(recovery_dir) / f"{stem}.recovery.{ts}{suffix}"
    atomic_write_text(recovery_path, text)
    return recovery_path
