"""SVCS controller - main orchestrator.

Wires settings, storage and the engines together and turns every
outcome into a ``CommandResult``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..config import ConfigLoader, SvcsSettings
from ..utils.env import log_debug
from .checkout import CheckoutEngine
from .commit import CommitEngine
from .errors import StorageFailure, SvcsError
from .index import IndexManager
from .log import CommitLog
from .storage import FileStorage, Storage


@dataclass
class CommandResult:
    """Human readable outcome of one command."""
    success: bool
    message: str
    error: str | None = None

    @property
    def fatal(self) -> bool:
        return self.error == StorageFailure.kind


class SvcsController:
    """Main controller for SVCS commands."""

    def __init__(
        self,
        project_root: Path | str | None = None,
        storage: Storage | None = None,
        settings: SvcsSettings | None = None,
    ):
        """Initialize controller.

        Args:
            project_root: Working directory (defaults to cwd)
            storage: Storage backend (defaults to FileStorage under project_root)
            settings: Settings (defaults to those loaded for project_root)
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self._config_loader = ConfigLoader(project_root=self.project_root)
        self._settings = settings
        self._storage = storage

    @property
    def settings(self) -> SvcsSettings:
        if self._settings is None:
            self._settings = self._config_loader.settings
        return self._settings

    @property
    def storage(self) -> Storage:
        """Get storage backend (lazy init)."""
        if self._storage is None:
            self._storage = FileStorage(self.project_root, self.settings.vcs_dir)
        return self._storage

    @property
    def index(self) -> IndexManager:
        return IndexManager(self.storage, self.settings.matching)

    @property
    def log(self) -> CommitLog:
        return CommitLog(self.storage, self.settings.matching)

    def init(self) -> CommandResult:
        """Create the storage directory layout if it is missing."""
        return self._run(self._init)

    def config(self, name: str | None = None) -> CommandResult:
        """Report the author, or replace it with ``name``."""
        return self._run(self._config, name)

    def add(self, path: str | None = None) -> CommandResult:
        """List tracked files, or stage ``path``."""
        return self._run(self._add, path)

    def show_log(self) -> CommandResult:
        return self._run(self._show_log)

    def commit(self, message: str | None) -> CommandResult:
        return self._run(self._commit, message)

    def checkout(self, commit_id: str | None) -> CommandResult:
        return self._run(self._checkout, commit_id)

    def _init(self) -> CommandResult:
        self.storage.ensure_layout()
        return CommandResult(success=True, message="")

    def _config(self, name: str | None) -> CommandResult:
        if name:
            self.storage.write_config(name)
        current = self.storage.read_config()
        if current is None:
            return CommandResult(success=True, message="Please, tell me who you are.")
        return CommandResult(success=True, message=f"The username is {current}.")

    def _add(self, path: str | None) -> CommandResult:
        if not path:
            tracked = self.index.list()
            if tracked is None:
                return CommandResult(success=True, message="Add a file to the index.")
            return CommandResult(success=True, message="Tracked files:\n" + "\n".join(tracked))

        self.index.add(path)
        return CommandResult(success=True, message=f"The file '{path}' is tracked.")

    def _show_log(self) -> CommandResult:
        text = self.log.render()
        if text is None:
            return CommandResult(success=True, message="No commits yet.")
        return CommandResult(success=True, message=text)

    def _commit(self, message: str | None) -> CommandResult:
        CommitEngine(self.storage, self.settings).commit(message)
        return CommandResult(success=True, message="Changes are committed.")

    def _checkout(self, commit_id: str | None) -> CommandResult:
        CheckoutEngine(self.storage, self.settings).checkout(commit_id)
        return CommandResult(success=True, message=f"Switched to commit {commit_id}.")

    def _run(self, action, *args) -> CommandResult:
        try:
            return action(*args)
        except SvcsError as e:
            log_debug(f"{action.__name__.lstrip('_')} failed ({e.kind}): {e}")
            return CommandResult(success=False, message=str(e), error=e.kind)
