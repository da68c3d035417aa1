"""Configuration: log level and optional scan root allowlist, read from env."""

from __future__ import annotations

import logging
import os
from pathlib import Path

DEFAULT_LOG_LEVEL = "WARNING"


def get_log_level() -> int:
    """Return the logging level named by ARCHITEST_LOG_LEVEL.

    Unknown names fall back to WARNING rather than failing startup.
    """
    name = os.environ.get("ARCHITEST_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.WARNING
    return level


def load_allowed_roots() -> list[Path]:
    """Load allowlisted scan roots from ARCHITEST_ALLOWED_ROOTS.

    Format: ``os.pathsep``-separated directories.
    Example: ARCHITEST_ALLOWED_ROOTS=/home/me/src:/srv/projects

    An empty list means every path may be scanned.
    """
    raw = os.environ.get("ARCHITEST_ALLOWED_ROOTS", "")
    roots: list[Path] = []
    for entry in raw.split(os.pathsep):
        entry = entry.strip()
        if not entry:
            continue
        roots.append(Path(entry).expanduser().resolve())
    return roots


def is_path_allowed(path: Path | str, roots: list[Path]) -> bool:
    """Return True if ``path`` lies inside one of ``roots`` (or roots is empty)."""
    if not roots:
        return True
    resolved = Path(path).expanduser().resolve()
    return any(resolved == root or resolved.is_relative_to(root) for root in roots)
