"""File system utilities for SVCS.

Provides atomic writes and the snapshot publish step.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path


def atomic_write(file_path: Path | str, content: str | bytes, mode: str = "w") -> None:
    """Write content atomically using tempfile + rename pattern.

    Args:
        file_path: Target file path
        content: Content to write
        mode: Write mode ('w' for text, 'wb' for binary)
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file must live on the same filesystem for os.replace
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        if "b" in mode:
            with os.fdopen(fd, mode) as f:
                f.write(content)
        else:
            with os.fdopen(fd, mode, encoding="utf-8", newline="") as f:
                f.write(content)
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def publish_directory(target: Path | str, files: dict[str, bytes]) -> bool:
    """Create ``target`` holding ``files`` in a single rename.

    The files are staged in a hidden sibling directory first, so a failure
    part way through never leaves a half-written ``target`` behind.

    Args:
        target: Directory to create
        files: Relative path -> content

    Returns:
        False if ``target`` already existed (it is left untouched)
    """
    target = Path(target)
    if target.exists():
        return False

    target.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(dir=target.parent, prefix=f".{target.name}."))
    try:
        for rel_path, data in files.items():
            dst = staging / rel_path
            dst.parent.mkdir(parents=True, exist_ok=True)
            dst.write_bytes(data)
        os.rename(staging, target)
    except Exception:
        shutil.rmtree(staging, ignore_errors=True)
        raise
    return True


def ensure_dir(dir_path: Path | str) -> Path:
    """Ensure directory exists, creating it if necessary.

    Args:
        dir_path: Directory path to create

    Returns:
        Path object for the directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_text_or_none(file_path: Path | str) -> str | None:
    """Read a UTF-8 text file, returning None when it does not exist."""
    try:
        with open(file_path, encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return None
