"""Staging index: the ordered list of tracked paths."""

from __future__ import annotations

from ..config.types import MatchMode
from ..utils.env import log_debug
from .errors import NotFound, UserInputMissing
from .storage import Storage


class IndexManager:
    """Reads and appends to the persisted tracked file set."""

    def __init__(self, storage: Storage, matching: MatchMode = MatchMode.SUBSTRING):
        self.storage = storage
        self.matching = matching

    def list(self) -> list[str] | None:
        """Return tracked paths in staging order, or None if nothing was staged."""
        text = self.storage.read_index()
        if text is None:
            return None
        return text.splitlines()

    def is_tracked(self, path: str, index_text: str) -> bool:
        # Substring mode treats "a.txt" as tracked once "data.txt" is.
        if self.matching == MatchMode.EXACT:
            return path in index_text.splitlines()
        return path in index_text

    def add(self, path: str) -> bool:
        """Stage ``path``.

        Returns:
            True if the path was appended, False if it was already tracked

        Raises:
            UserInputMissing: Empty path
            NotFound: The path does not exist in the working directory
        """
        if not path:
            raise UserInputMissing("Path was not passed.")
        if not self.storage.working_exists(path):
            raise NotFound(f"Can't find '{path}'.")

        text = self.storage.read_index()
        if text is None:
            self.storage.write_index(path + "\n")
            log_debug(f"Index created with '{path}'")
            return True

        if self.is_tracked(path, text):
            log_debug(f"'{path}' already tracked")
            return False

        self.storage.write_index(text + path + "\n")
        log_debug(f"Appended '{path}' to index")
        return True
