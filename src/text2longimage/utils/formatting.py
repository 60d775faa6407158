"""Formatting helpers for CLI output and history listings."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")


def truncate(text: str, max_len: int) -> str:
    if max_len < 1:
        return ""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."


def format_size(bytes_val: int) -> str:
    size = float(bytes_val)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def get_first_lines(text: str, max_lines: int = 10) -> str:
    """Return the first *max_lines* lines of *text*, joined with ``\\n``."""
    if max_lines < 1:
        return ""
    return "\n".join(_LINE_SPLIT.split(text)[:max_lines])


def format_ago(timestamp: datetime, now: datetime | None = None) -> str:
    """Describe *timestamp* relative to *now*.

    Anything older than a week is shown as a plain date instead.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    total_seconds = int((now - timestamp).total_seconds())

    if total_seconds < 3600:
        minutes = max(total_seconds, 0) // 60
        return "just now" if minutes <= 1 else f"{minutes} minutes ago"

    hours = total_seconds // 3600
    if hours < 24:
        return f"{hours} hour{'s' if hours != 1 else ''} ago"

    days = hours // 24
    if days < 7:
        return f"{days} day{'s' if days != 1 else ''} ago"

    return timestamp.strftime("%Y-%m-%d")


def copy_to_clipboard(text: str) -> bool:
    """Copy text to system clipboard. Returns True on success."""
    import shutil
    import subprocess

    for cmd in ("xclip", "xsel", "wl-copy"):
        if shutil.which(cmd):
            args = [cmd]
            if cmd == "xclip":
                args += ["-selection", "clipboard"]
            elif cmd == "xsel":
                args += ["--clipboard", "--input"]
            try:
                subprocess.run(args, input=text.encode(), check=True)
                return True
            except (subprocess.CalledProcessError, OSError) as exc:
                logger.debug("Clipboard helper %s failed: %s", cmd, exc)
                continue
    return False
