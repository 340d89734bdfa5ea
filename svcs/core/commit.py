"""Commit engine.

``plan_commit`` decides what a commit request does from a snapshot of
the current state; ``CommitEngine`` gathers that state from storage and
carries the decision out.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath

from ..config.types import MatchMode, SnapshotLayout, SvcsSettings
from ..utils.env import log_debug
from .errors import PreconditionUnmet, UserInputMissing
from .fingerprint import fingerprint_bytes, fingerprint_files
from .index import IndexManager
from .log import CommitLog, CommitRecord, contains_id
from .storage import Storage


class CommitStep(str, Enum):
    """Outcome of the commit decision sequence, first match wins."""
    NO_MESSAGE = "no_message"
    NO_AUTHOR = "no_author"
    NO_FILES = "no_files"
    FIRST_COMMIT = "first_commit"
    NOTHING_TO_COMMIT = "nothing_to_commit"
    COMMIT = "commit"


@dataclass(frozen=True, slots=True)
class CommitState:
    """Everything the decision sequence looks at."""
    message: str | None
    author: str | None
    tracked: list[str] | None
    log_text: str | None
    fingerprint: str | None = None
    matching: MatchMode = MatchMode.SUBSTRING


def plan_commit(state: CommitState) -> CommitStep:
    """Run the commit decision sequence over ``state``.

    The dedup check is skipped when there is no log yet. Otherwise the
    fingerprint is looked up in the whole log, not only the latest record.
    """
    if not state.message:
        return CommitStep.NO_MESSAGE
    if state.author is None:
        return CommitStep.NO_AUTHOR
    if state.tracked is None:
        return CommitStep.NO_FILES
    if state.log_text is None:
        return CommitStep.FIRST_COMMIT
    if state.fingerprint is not None and contains_id(state.log_text, state.fingerprint, state.matching):
        return CommitStep.NOTHING_TO_COMMIT
    return CommitStep.COMMIT


def snapshot_name(path: str, layout: SnapshotLayout = SnapshotLayout.FLAT) -> str:
    """Name of a tracked path inside a commit directory.

    Flat names drop the directories, so ``a/x.txt`` and ``b/x.txt``
    collide. Nested names keep the relative path unless it is absolute
    or climbs out with ``..``.
    """
    pure = PurePosixPath(path.replace("\\", "/"))
    if layout == SnapshotLayout.NESTED and not pure.is_absolute() and ".." not in pure.parts:
        parts = [part for part in pure.parts if part != "."]
        if parts:
            return "/".join(parts)
    return pure.name


class CommitEngine:
    """Creates commits from the tracked files."""

    def __init__(self, storage: Storage, settings: SvcsSettings | None = None):
        self.storage = storage
        self.settings = settings or SvcsSettings()
        self.index = IndexManager(storage, self.settings.matching)
        self.log = CommitLog(storage, self.settings.matching)

    def current_fingerprint(self, tracked: list[str]) -> str:
        return fingerprint_files(self.storage, tracked, self.settings.fingerprint_width)

    def gather_state(self, message: str | None) -> CommitState:
        author = self.storage.read_config()
        tracked = self.index.list()
        log_text = self.log.text()

        fingerprint = None
        if message and author is not None and tracked is not None and log_text is not None:
            # Log is fully read before the dedup fingerprint is taken.
            fingerprint = self.current_fingerprint(tracked)

        return CommitState(
            message=message,
            author=author,
            tracked=tracked,
            log_text=log_text,
            fingerprint=fingerprint,
            matching=self.settings.matching,
        )

    def commit(self, message: str | None) -> CommitRecord:
        """Commit the tracked files.

        Returns:
            The record prepended to the log

        Raises:
            UserInputMissing: No message
            PreconditionUnmet: No author, nothing staged or nothing changed
            StorageFailure: Reading a tracked file or writing state failed
        """
        state = self.gather_state(message)
        step = plan_commit(state)
        log_debug(f"Commit decision: {step.value}")

        if step == CommitStep.NO_MESSAGE:
            raise UserInputMissing("Message was not passed.")
        if step == CommitStep.NO_AUTHOR:
            raise PreconditionUnmet("Please configure the user.")
        if step == CommitStep.NO_FILES:
            raise PreconditionUnmet("No files staged.")
        if step == CommitStep.NOTHING_TO_COMMIT:
            raise PreconditionUnmet("Nothing to commit.")

        return self._record(
            state.tracked or [],
            state.author or "",
            message or "",
            first=step == CommitStep.FIRST_COMMIT,
        )

    def _record(self, tracked: list[str], author: str, message: str, first: bool = False) -> CommitRecord:
        contents = [self.storage.read_working(path) for path in tracked]
        fingerprint = fingerprint_bytes(contents, self.settings.fingerprint_width)

        files: dict[str, bytes] = {}
        for path, data in zip(tracked, contents):
            files[snapshot_name(path, self.settings.snapshot_layout)] = data

        # The snapshot is published before the log mentions it.
        self.storage.write_snapshot(fingerprint, files)

        if first:
            self.log.initialize()
        record = CommitRecord(fingerprint=fingerprint, author=author, message=message)
        self.log.prepend(record)
        log_debug(f"Committed {fingerprint} ({len(files)} files)")
        return record
