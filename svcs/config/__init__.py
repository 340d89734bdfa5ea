"""Settings management for SVCS."""

from .types import MatchMode, SnapshotLayout, SvcsSettings
from .loader import ConfigLoader

__all__ = [
    "MatchMode",
    "SnapshotLayout",
    "SvcsSettings",
    "ConfigLoader",
]
