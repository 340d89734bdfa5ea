"""Content fingerprints for the tracked file set."""

from __future__ import annotations

import hashlib
from typing import Iterable

from .storage import Storage


DEFAULT_WIDTH = 32


def fingerprint_bytes(chunks: Iterable[bytes], width: int = DEFAULT_WIDTH) -> str:
    """SHA-256 over the concatenated chunks, as zero-padded hex.

    The digest is read as an unsigned integer and rendered without
    leading zeros, then padded up to ``width``. The width is a floor:
    a 64-digit digest is never truncated.
    """
    digest = hashlib.sha256()
    for chunk in chunks:
        digest.update(chunk)
    return format(int.from_bytes(digest.digest(), "big"), "x").zfill(width)


def fingerprint_files(storage: Storage, paths: Iterable[str], width: int = DEFAULT_WIDTH) -> str:
    """Fingerprint the current working copies of ``paths``, in order.

    Raises:
        StorageFailure: A tracked file can no longer be read
    """
    return fingerprint_bytes((storage.read_working(path) for path in paths), width)
