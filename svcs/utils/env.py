"""Environment utilities for SVCS."""

from __future__ import annotations

import os
import sys
from pathlib import Path


TRUTHY = ("1", "true", "yes", "on")


def is_debug_mode() -> bool:
    """Check if debug mode is enabled.

    Returns:
        True if SVCS_DEBUG is set to a truthy value
    """
    val = os.environ.get("SVCS_DEBUG", "").lower()
    return val in TRUTHY


def log_debug(message: str) -> None:
    """Log debug message to stderr.

    Only outputs if SVCS_DEBUG is set.
    """
    if is_debug_mode():
        print(f"[svcs] {message}", file=sys.stderr)


def get_home_dir() -> Path:
    return Path.home()


def get_global_svcs_dir() -> Path:
    """Get global settings directory (~/.svcs)."""
    return get_home_dir() / ".svcs"


def get_project_root() -> Path:
    """Get the working directory SVCS operates on.

    SVCS_PROJECT_ROOT wins over the current directory.
    """
    val = os.environ.get("SVCS_PROJECT_ROOT")
    if isinstance(val, str) and val.strip():
        return Path(val.strip()).expanduser()
    return Path.cwd()
