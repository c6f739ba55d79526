"""File I/O operations for artifact writing."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..core.errors import ArtifactWriteError


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    The temporary file is created with owner-only permissions and chmod'ed
    before the rename, so secrets are never readable by others even briefly.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)

    Raises:
        ArtifactWriteError: The file could not be written
    """
    try:
        ensure_parent(path)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as exc:
        raise ArtifactWriteError(f"Cannot write {path}: {exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as exc:
        raise ArtifactWriteError(f"Cannot write {path}: {exc}") from exc
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
