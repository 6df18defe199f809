"""Filesystem helpers for gog-managed files.

gog writes three kinds of file: the feature record, the project changelog
and the user config. The first two are committed to the project, so a
rewrite keeps the permissions the file already had.

All helpers raise OSError; callers turn it into their own error type.
"""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "read_text_if_exists", "remove_tree"]

_DEFAULT_MODE = 0o666


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return _DEFAULT_MODE & ~umask


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Replace `path` with `content` in one rename.

    Readers see the old text or the new text, never a partial write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


def read_text_if_exists(path: Path, *, encoding: str = "utf-8") -> str | None:
    """File contents, or None when there is no such file."""
    try:
        return path.read_text(encoding=encoding)
    except FileNotFoundError:
        return None


def remove_tree(path: Path) -> bool:
    """Delete a directory and everything in it. False if it was not there."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return False
    return True
