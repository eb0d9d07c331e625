"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def is_writable(path: Path) -> bool:
    """Return whether the current process may rewrite ``path``."""

    return os.access(path, os.W_OK)


def read_text(path: Path, encoding: str) -> str:
    """Read ``path`` without newline translation so line endings survive."""

    with open(path, "r", encoding=encoding, newline="") as handle:
        return handle.read()


def atomic_write_text(path: Path, content: str, encoding: str) -> None:
    """Replace ``path`` with ``content`` in one step.

    The text is written to a sibling temporary file which then replaces the
    target, so readers never observe a partially written file. The original
    permission bits are carried over when the target already exists.
    """

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            _ = handle.write(content)
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


__all__ = ["ensure_directory", "is_writable", "read_text", "atomic_write_text"]
