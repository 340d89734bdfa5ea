"""Utility modules for SVCS."""

from .fs import atomic_write, ensure_dir, publish_directory, read_text_or_none
from .env import get_global_svcs_dir, get_home_dir, get_project_root, is_debug_mode, log_debug

__all__ = [
    "atomic_write",
    "ensure_dir",
    "publish_directory",
    "read_text_or_none",
    "get_global_svcs_dir",
    "get_home_dir",
    "get_project_root",
    "is_debug_mode",
    "log_debug",
]
