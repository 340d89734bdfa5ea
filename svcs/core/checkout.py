"""Checkout engine: copy a commit's files back into the working directory."""

from __future__ import annotations

from enum import Enum

from ..config.types import MatchMode, SvcsSettings
from ..utils.env import log_debug
from .errors import NotFound, UserInputMissing
from .log import contains_id
from .storage import Storage


class CheckoutStep(str, Enum):
    NO_ID = "no_id"
    UNKNOWN = "unknown"
    RESTORE = "restore"


def plan_checkout(
    commit_id: str | None,
    log_text: str | None,
    matching: MatchMode = MatchMode.SUBSTRING,
) -> CheckoutStep:
    """Decide whether ``commit_id`` may be checked out.

    A missing log counts as a log that does not mention the id.
    """
    if not commit_id:
        return CheckoutStep.NO_ID
    if log_text is None or not contains_id(log_text, commit_id, matching):
        return CheckoutStep.UNKNOWN
    return CheckoutStep.RESTORE


class CheckoutEngine:
    """Restores commit snapshots."""

    def __init__(self, storage: Storage, settings: SvcsSettings | None = None):
        self.storage = storage
        self.settings = settings or SvcsSettings()

    def checkout(self, commit_id: str | None) -> list[str]:
        """Overwrite working files with the content stored for ``commit_id``.

        The snapshot is looked up by the literal id. Working files that
        are not part of the snapshot are left alone. In substring mode an
        id accepted by the log but naming no snapshot restores nothing.

        Returns:
            Working paths that were written

        Raises:
            UserInputMissing: No id
            NotFound: The id is not in the log, or (exact mode) has no snapshot
            StorageFailure: Reading the snapshot or writing a file failed
        """
        step = plan_checkout(commit_id, self.storage.read_log(), self.settings.matching)
        log_debug(f"Checkout decision: {step.value}")

        if step == CheckoutStep.NO_ID or not commit_id:
            raise UserInputMissing("Commit id was not passed.")
        if step == CheckoutStep.UNKNOWN:
            raise NotFound("Commit does not exist.")

        restored: list[str] = []
        if not self.storage.snapshot_exists(commit_id):
            if self.settings.matching == MatchMode.EXACT:
                raise NotFound("Commit does not exist.")
            log_debug(f"No snapshot named {commit_id}, nothing restored")
            return restored

        for name, data in self.storage.read_snapshot(commit_id).items():
            self.storage.write_working(name, data)
            restored.append(name)

        log_debug(f"Restored {len(restored)} files from {commit_id}")
        return restored
