"""Commit log, stored newest first as blank-line separated blocks."""

from __future__ import annotations

from dataclasses import dataclass

from ..config.types import MatchMode
from .storage import Storage


RECORD_SEPARATOR = "\n\n"


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """One commit entry of the log."""
    fingerprint: str
    author: str
    message: str

    def render(self) -> str:
        return f"commit {self.fingerprint}\nAuthor: {self.author}\n{self.message}\n\n"

    @classmethod
    def parse(cls, block: str) -> CommitRecord:
        """Parse a single block (without its trailing separator)."""
        lines = block.split("\n")
        fingerprint = lines[0].removeprefix("commit ") if lines else ""
        author = lines[1].removeprefix("Author: ") if len(lines) > 1 else ""
        message = "\n".join(lines[2:])
        return cls(fingerprint=fingerprint, author=author, message=message)


def contains_id(log_text: str, commit_id: str, matching: MatchMode = MatchMode.SUBSTRING) -> bool:
    """Check whether ``commit_id`` refers to a commit in ``log_text``.

    Substring mode looks anywhere in the text, which also accepts a
    fragment of a fingerprint, an author name or a message. Exact mode
    compares against the fingerprint of every record.
    """
    if not commit_id:
        return False
    if matching == MatchMode.EXACT:
        return any(record.fingerprint == commit_id for record in parse_log(log_text))
    return commit_id in log_text


def parse_log(log_text: str) -> list[CommitRecord]:
    blocks = [block for block in log_text.split(RECORD_SEPARATOR) if block.strip()]
    return [CommitRecord.parse(block.strip("\n")) for block in blocks]


class CommitLog:
    """Prepend-only commit log."""

    def __init__(self, storage: Storage, matching: MatchMode = MatchMode.SUBSTRING):
        self.storage = storage
        self.matching = matching

    def exists(self) -> bool:
        return self.storage.read_log() is not None

    def text(self) -> str | None:
        return self.storage.read_log()

    def read(self) -> list[CommitRecord] | None:
        """All records, newest first, or None if nothing was ever committed."""
        text = self.storage.read_log()
        if text is None:
            return None
        return parse_log(text)

    def render(self) -> str | None:
        """Log text as shown to the user, without the final separator."""
        text = self.storage.read_log()
        if text is None:
            return None
        return text.removesuffix(RECORD_SEPARATOR)

    def initialize(self) -> None:
        self.storage.write_log("")

    def prepend(self, record: CommitRecord) -> None:
        self.storage.write_log(record.render() + (self.storage.read_log() or ""))

    def contains(self, commit_id: str) -> bool:
        text = self.storage.read_log()
        if text is None:
            return False
        return contains_id(text, commit_id, self.matching)
