"""Core modules for SVCS."""

from .checkout import CheckoutEngine
from .commit import CommitEngine
from .controller import CommandResult, SvcsController
from .index import IndexManager
from .log import CommitLog, CommitRecord
from .storage import FileStorage, MemoryStorage

__all__ = [
    "CheckoutEngine",
    "CommitEngine",
    "CommandResult",
    "SvcsController",
    "IndexManager",
    "CommitLog",
    "CommitRecord",
    "FileStorage",
    "MemoryStorage",
]
