"""Settings loader for SVCS.

Handles loading and merging settings from multiple sources.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from ..utils.env import get_global_svcs_dir, log_debug
from ..utils.fs import atomic_write
from .types import SvcsSettings


SETTINGS_FILE = "settings.json"


def _load_json(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        log_debug(f"Ignoring unreadable settings file {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


class ConfigLoader:
    """Loads and manages SVCS settings."""

    def __init__(self, project_root: Path | None = None):
        """Initialize settings loader.

        Args:
            project_root: Working directory (for project-local settings)
        """
        self.project_root = project_root
        self._settings: SvcsSettings | None = None

    @property
    def settings(self) -> SvcsSettings:
        """Get loaded settings, loading if necessary."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> SvcsSettings:
        """Load settings from all sources.

        Priority (highest to lowest):
        1. Environment (SVCS_DIR)
        2. Project settings (<vcs_dir>/settings.json)
        3. Global settings (~/.svcs/config.json)
        4. Default values

        The project settings file lives inside the storage directory, so
        the directory name is resolved from the global layer and the
        environment before it is read.

        Returns:
            Merged SvcsSettings
        """
        merged: dict[str, Any] = {}

        global_path = get_global_svcs_dir() / "config.json"
        if global_path.exists():
            merged = self._deep_merge(merged, _load_json(global_path))

        env_dir = os.environ.get("SVCS_DIR", "").strip()
        if env_dir:
            merged["vcsDir"] = env_dir

        if self.project_root:
            vcs_dir = SvcsSettings.from_dict(merged).vcs_dir
            project_path = Path(self.project_root) / vcs_dir / SETTINGS_FILE
            if project_path.exists():
                merged = self._deep_merge(merged, _load_json(project_path))

        if env_dir:
            merged["vcsDir"] = env_dir

        settings = SvcsSettings.from_dict(merged)
        log_debug(f"Settings: {settings.to_dict()}")
        return settings

    def reload(self) -> SvcsSettings:
        """Force reload settings."""
        self._settings = None
        return self.settings

    def save_settings(self, settings: SvcsSettings, scope: str = "project") -> Path:
        """Save settings to file.

        Args:
            settings: Settings to save
            scope: "project" or "global"

        Returns:
            Path where settings were saved
        """
        if scope == "global":
            path = get_global_svcs_dir() / "config.json"
        else:
            if not self.project_root:
                raise ValueError("No project root set for project-scope settings")
            path = Path(self.project_root) / settings.vcs_dir / SETTINGS_FILE

        atomic_write(path, json.dumps(settings.to_dict(), indent=2))
        return path

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Dictionary to merge (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
