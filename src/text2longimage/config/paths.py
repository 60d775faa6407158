"""Centralized path definitions for text2longimage.

Respects $XDG_CONFIG_HOME and $XDG_DATA_HOME when set.
"""

from __future__ import annotations

import os
from pathlib import Path

_xdg_config = os.environ.get("XDG_CONFIG_HOME")
_xdg_data = os.environ.get("XDG_DATA_HOME")

SECURE_FILE_MODE = 0o600
SECURE_DIR_MODE = 0o700

CONFIG_DIR = (
    (Path(_xdg_config) / "text2longimage")
    if _xdg_config
    else (Path.home() / ".config" / "text2longimage")
)
CONFIG_FILE = CONFIG_DIR / "config.toml"

DATA_DIR = (
    (Path(_xdg_data) / "text2longimage")
    if _xdg_data
    else (Path.home() / ".local" / "share" / "text2longimage")
)
HISTORY_DB = DATA_DIR / "history.db"

_dirs_ensured = False


def ensure_dirs() -> None:
    """Create config and data directories with secure permissions.

    Called lazily from the CLI rather than at import time so tests never
    touch the real home directory.
    """
    global _dirs_ensured
    if _dirs_ensured:
        return
    for _dir in (CONFIG_DIR, DATA_DIR):
        _dir.mkdir(parents=True, exist_ok=True)
        os.chmod(_dir, SECURE_DIR_MODE)
    _dirs_ensured = True
