"""Utility modules."""

from __future__ import annotations

from text2longimage.utils.charclass import (
    WidthClass,
    char_width,
    is_wide,
    measure_width,
    text_is_wide_script,
)
from text2longimage.utils.formatting import (
    copy_to_clipboard,
    format_ago,
    format_size,
    get_first_lines,
    truncate,
)

__all__ = [
    "WidthClass",
    "is_wide",
    "char_width",
    "text_is_wide_script",
    "measure_width",
    "truncate",
    "format_size",
    "format_ago",
    "get_first_lines",
    "copy_to_clipboard",
]
