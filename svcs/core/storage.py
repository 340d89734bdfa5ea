"""Storage backends for SVCS.

Everything the engines persist or touch goes through a ``Storage``:
the author config, the index, the log, the commit snapshots and the
working directory files. ``FileStorage`` is the on-disk layout,
``MemoryStorage`` keeps the same state in dictionaries.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from ..utils.env import log_debug
from ..utils.fs import atomic_write, ensure_dir, publish_directory, read_text_or_none
from .errors import StorageFailure


CONFIG_FILE = "config.txt"
INDEX_FILE = "index.txt"
LOG_FILE = "log.txt"
COMMIT_DIRECTORY = "commits"


class Storage(Protocol):
    """Persisted state and working directory access."""

    def ensure_layout(self) -> None: ...

    def read_config(self) -> str | None: ...

    def write_config(self, text: str) -> None: ...

    def read_index(self) -> str | None: ...

    def write_index(self, text: str) -> None: ...

    def read_log(self) -> str | None: ...

    def write_log(self, text: str) -> None: ...

    def working_exists(self, path: str) -> bool: ...

    def read_working(self, path: str) -> bytes: ...

    def write_working(self, path: str, data: bytes) -> None: ...

    def snapshot_exists(self, name: str) -> bool: ...

    def write_snapshot(self, name: str, files: dict[str, bytes]) -> bool: ...

    def read_snapshot(self, name: str) -> dict[str, bytes]: ...


class FileStorage:
    """Filesystem layout under ``<project_root>/<vcs_dir>``."""

    def __init__(self, project_root: Path | str, vcs_dir: str = "vcs"):
        """Initialize file storage.

        Args:
            project_root: Working directory holding the tracked files
            vcs_dir: Name of the storage directory inside project_root
        """
        self.project_root = Path(project_root)
        self.root = self.project_root / vcs_dir
        self.commits_dir = self.root / COMMIT_DIRECTORY

    def ensure_layout(self) -> None:
        try:
            ensure_dir(self.commits_dir)
        except OSError as e:
            raise StorageFailure(f"Can't create {self.commits_dir}: {e}") from e

    def read_config(self) -> str | None:
        return self._read(CONFIG_FILE)

    def write_config(self, text: str) -> None:
        self._write(CONFIG_FILE, text)

    def read_index(self) -> str | None:
        return self._read(INDEX_FILE)

    def write_index(self, text: str) -> None:
        self._write(INDEX_FILE, text)

    def read_log(self) -> str | None:
        return self._read(LOG_FILE)

    def write_log(self, text: str) -> None:
        self._write(LOG_FILE, text)

    def working_exists(self, path: str) -> bool:
        return (self.project_root / path).exists()

    def read_working(self, path: str) -> bytes:
        try:
            return (self.project_root / path).read_bytes()
        except OSError as e:
            raise StorageFailure(f"Can't read '{path}': {e}") from e

    def write_working(self, path: str, data: bytes) -> None:
        target = self.project_root / path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise StorageFailure(f"Can't write '{path}': {e}") from e

    def snapshot_exists(self, name: str) -> bool:
        if not _is_plain_name(name):
            return False
        return (self.commits_dir / name).is_dir()

    def write_snapshot(self, name: str, files: dict[str, bytes]) -> bool:
        """Publish a snapshot directory; never overwrites an existing one.

        Returns:
            True if the snapshot was created, False if it already existed
        """
        try:
            created = publish_directory(self.commits_dir / name, files)
        except OSError as e:
            raise StorageFailure(f"Can't write snapshot {name}: {e}") from e
        if not created:
            log_debug(f"Snapshot {name} already exists, keeping it")
        return created

    def read_snapshot(self, name: str) -> dict[str, bytes]:
        snapshot_dir = self.commits_dir / name
        files: dict[str, bytes] = {}
        try:
            for root, dirs, names in os.walk(snapshot_dir):
                dirs.sort()
                for file in sorted(names):
                    src = Path(root) / file
                    files[src.relative_to(snapshot_dir).as_posix()] = src.read_bytes()
        except OSError as e:
            raise StorageFailure(f"Can't read snapshot {name}: {e}") from e
        return files

    def _read(self, file_name: str) -> str | None:
        try:
            return read_text_or_none(self.root / file_name)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageFailure(f"Can't read {file_name}: {e}") from e

    def _write(self, file_name: str, text: str) -> None:
        try:
            atomic_write(self.root / file_name, text)
        except OSError as e:
            raise StorageFailure(f"Can't write {file_name}: {e}") from e


class MemoryStorage:
    """In-memory storage with the same semantics as ``FileStorage``."""

    def __init__(
        self,
        working: dict[str, bytes] | None = None,
        config: str | None = None,
        index: str | None = None,
        log: str | None = None,
    ):
        self.working: dict[str, bytes] = dict(working or {})
        self.config = config
        self.index = index
        self.log = log
        self.snapshots: dict[str, dict[str, bytes]] = {}

    def ensure_layout(self) -> None:
        pass

    def read_config(self) -> str | None:
        return self.config

    def write_config(self, text: str) -> None:
        self.config = text

    def read_index(self) -> str | None:
        return self.index

    def write_index(self, text: str) -> None:
        self.index = text

    def read_log(self) -> str | None:
        return self.log

    def write_log(self, text: str) -> None:
        self.log = text

    def working_exists(self, path: str) -> bool:
        return path in self.working

    def read_working(self, path: str) -> bytes:
        try:
            return self.working[path]
        except KeyError:
            raise StorageFailure(f"Can't read '{path}': no such file") from None

    def write_working(self, path: str, data: bytes) -> None:
        self.working[path] = data

    def snapshot_exists(self, name: str) -> bool:
        return name in self.snapshots

    def write_snapshot(self, name: str, files: dict[str, bytes]) -> bool:
        if name in self.snapshots:
            return False
        self.snapshots[name] = dict(files)
        return True

    def read_snapshot(self, name: str) -> dict[str, bytes]:
        return dict(self.snapshots.get(name, {}))


def _is_plain_name(name: str) -> bool:
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name
