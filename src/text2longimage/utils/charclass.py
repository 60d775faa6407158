"""Character classification for layout.

Two separate notions live here and they intentionally disagree:

* *wide script* (``is_wide``) -- Han, Hiragana, Katakana and the CJK
  extension blocks.  Decides which line breaker handles a logical line.
* *display width* (``char_width``) -- 1 for anything in Latin-1, 2 for
  everything else.  Used as the layout budget currency, so a Cyrillic or
  emoji character counts as 2 even though it is not CJK.
"""

from __future__ import annotations

import bisect
from enum import IntEnum

# Inclusive (start, end) code-point ranges, sorted by start.  Disjoint.
_WIDE_RANGES: tuple[tuple[int, int], ...] = (
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    (0x3400, 0x4DBF),  # CJK Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x20000, 0x2A6DF),  # CJK Extension B
)
_RANGE_STARTS = [start for start, _ in _WIDE_RANGES]

# Highest code point that counts as a single width unit.
NARROW_MAX = 0xFF


class WidthClass(IntEnum):
    NARROW = 1
    WIDE = 2


def is_wide(char: str) -> bool:
    """Return True if *char* belongs to one of the CJK script ranges."""
    cp = ord(char)
    idx = bisect.bisect_right(_RANGE_STARTS, cp) - 1
    if idx < 0:
        return False
    return cp <= _WIDE_RANGES[idx][1]


def width_class(char: str) -> WidthClass:
    return WidthClass.NARROW if ord(char) <= NARROW_MAX else WidthClass.WIDE


def char_width(char: str) -> int:
    """Return the layout width of *char*: 1 for Latin-1, 2 otherwise."""
    return int(width_class(char))


def text_is_wide_script(text: str) -> bool:
    """Return True as soon as any character of *text* is wide script."""
    return any(is_wide(ch) for ch in text)


def measure_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)
