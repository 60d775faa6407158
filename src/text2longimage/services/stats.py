"""Text statistics."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from text2longimage.services.justify import split_logical_lines
from text2longimage.utils.charclass import NARROW_MAX, char_width, is_wide


@dataclass(frozen=True)
class TextStats:
    char_count: int
    byte_count: int
    line_count: int
    cjk_count: int
    ascii_count: int
    display_width: int

    @property
    def has_cjk(self) -> bool:
        return self.cjk_count > 0

    def to_dict(self) -> dict[str, Any]:
        """Return the fixed camelCase record shape."""
        return {
            "charCount": self.char_count,
            "byteCount": self.byte_count,
            "lineCount": self.line_count,
            "cjkCount": self.cjk_count,
            "asciiCount": self.ascii_count,
            "displayWidth": self.display_width,
            "hasCjk": self.has_cjk,
        }


def get_text_stats(text: str) -> TextStats:
    """Count characters, bytes, lines and wide-script characters in *text*.

    ``line_count`` uses the same splitting as ``justify``: terminators + 1,
    so the empty string is one (empty) line.
    """
    cjk_count = 0
    ascii_count = 0
    display_width = 0
    for ch in text:
        if is_wide(ch):
            cjk_count += 1
        if ord(ch) <= NARROW_MAX:
            ascii_count += 1
        display_width += char_width(ch)

    return TextStats(
        char_count=len(text),
        byte_count=len(text.encode("utf-8")),
        line_count=len(split_logical_lines(text)),
        cjk_count=cjk_count,
        ascii_count=ascii_count,
        display_width=display_width,
    )


def stats_json(text: str, *, indent: int | None = None) -> str:
    return json.dumps(get_text_stats(text).to_dict(), indent=indent)
