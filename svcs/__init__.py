"""SVCS - a small local version control system.

Tracks a set of files, commits content-addressed snapshots of them,
and checks old snapshots back out into the working directory.
"""

__version__ = "1.0.0"
