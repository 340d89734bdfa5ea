"""Error types raised by the SVCS engines."""

from __future__ import annotations


class SvcsError(Exception):
    """Base class for reportable command failures."""

    kind = "error"


class UserInputMissing(SvcsError):
    """A required argument (message, path or commit id) was not given."""

    kind = "user_input_missing"


class NotFound(SvcsError):
    """A referenced path or commit does not exist."""

    kind = "not_found"


class PreconditionUnmet(SvcsError):
    """The command cannot run in the current state."""

    kind = "precondition_unmet"


class StorageFailure(SvcsError):
    """Reading or writing persisted state failed."""

    kind = "storage_failure"
