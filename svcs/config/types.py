"""Settings schemas for SVCS."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MatchMode(str, Enum):
    """How paths and commit ids are looked up in the index and log."""
    SUBSTRING = "substring"  # containment anywhere in the stored text
    EXACT = "exact"          # whole line / whole fingerprint equality


class SnapshotLayout(str, Enum):
    """How tracked paths are named inside a commit directory."""
    FLAT = "flat"      # base name only
    NESTED = "nested"  # relative path preserved


@dataclass
class SvcsSettings:
    """Effective settings for one invocation."""
    vcs_dir: str = "vcs"
    matching: MatchMode = MatchMode.SUBSTRING
    snapshot_layout: SnapshotLayout = SnapshotLayout.FLAT
    canonical_fingerprint: bool = False

    @property
    def fingerprint_width(self) -> int:
        return 64 if self.canonical_fingerprint else 32

    @classmethod
    def from_dict(cls, data: dict) -> SvcsSettings:
        """Create settings from a dictionary, ignoring invalid values."""
        defaults = cls()

        vcs_dir = data.get("vcsDir", defaults.vcs_dir)
        if not isinstance(vcs_dir, str) or not vcs_dir.strip():
            vcs_dir = defaults.vcs_dir

        matching = defaults.matching
        matching_val = data.get("matching")
        if isinstance(matching_val, str) and matching_val in {m.value for m in MatchMode}:
            matching = MatchMode(matching_val)

        layout = defaults.snapshot_layout
        layout_val = data.get("snapshotLayout")
        if isinstance(layout_val, str) and layout_val in {m.value for m in SnapshotLayout}:
            layout = SnapshotLayout(layout_val)

        canonical = data.get("canonicalFingerprint", defaults.canonical_fingerprint)

        return cls(
            vcs_dir=vcs_dir.strip(),
            matching=matching,
            snapshot_layout=layout,
            canonical_fingerprint=canonical if isinstance(canonical, bool) else False,
        )

    def to_dict(self) -> dict:
        return {
            "vcsDir": self.vcs_dir,
            "matching": self.matching.value,
            "snapshotLayout": self.snapshot_layout.value,
            "canonicalFingerprint": self.canonical_fingerprint,
        }
