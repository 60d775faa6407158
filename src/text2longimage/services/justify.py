"""Greedy line breaking for fixed-width output.

Each logical input line is wrapped by exactly one of two breakers:

* ``WrapMode.CJK`` packs individual characters, measuring each with
  ``char_width`` (1 or 2 width units).
* ``WrapMode.WORD`` packs whitespace-delimited words, measuring plain
  string length.  Words are never split; an oversized word gets a line of
  its own.

The mode is picked once per logical line: a single wide-script character
anywhere in the line sends the whole line through the CJK breaker, so the
two measurement units never mix within one output line.

Output lines are always joined with ``CRLF`` no matter which terminator
style the input used.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from text2longimage.utils.charclass import char_width, text_is_wide_script

CRLF = "\r\n"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_TERMINATORS = frozenset("\r\n")

# Unicode White_Space.  Unlike str.isspace() this excludes U+001C..U+001F.
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    + "".join(chr(cp) for cp in range(0x2000, 0x200B))
    + "\u2028\u2029\u202f\u205f\u3000"
)
_WORD_SEP = re.compile(f"[{re.escape(WHITESPACE)}]+")


class WrapMode(StrEnum):
    """Line breaking strategy for a logical line."""

    CJK = auto()
    WORD = auto()

    @classmethod
    def for_line(cls, line: str) -> WrapMode:
        return cls.CJK if text_is_wide_script(line) else cls.WORD


def split_logical_lines(text: str) -> list[str]:
    """Split on ``\\r\\n``, ``\\r`` or ``\\n``.  Always returns at least one line."""
    return _LINE_BREAK.split(text)


def wrap_cjk(text: str, max_chars_per_line: int) -> str:
    """Wrap *text* character by character within *max_chars_per_line* width units.

    Single pass, no lookahead.  Terminators already present in *text* close
    the current line (``\\r\\n`` counts once).  A character that does not
    fit starts a new line; a character wider than the whole budget still
    gets placed, alone.
    """
    lines: list[str] = []
    current: list[str] = []
    current_width = 0
    prev = ""

    for ch in text:
        if ch in _TERMINATORS:
            if not (ch == "\n" and prev == "\r"):
                lines.append("".join(current))
                current = []
                current_width = 0
            prev = ch
            continue
        prev = ch

        width = char_width(ch)
        if current and current_width + width > max_chars_per_line:
            lines.append("".join(current))
            current = [ch]
            current_width = width
        else:
            current.append(ch)
            current_width += width

    lines.append("".join(current))
    return CRLF.join(lines)


def wrap_words(text: str, max_chars_per_line: int) -> str:
    """Wrap *text* on whitespace so each line holds at most *max_chars_per_line* characters.

    Runs of whitespace collapse to a single space and leading/trailing
    whitespace is dropped.  A word longer than the budget is kept whole.
    """
    lines: list[str] = []
    current_words: list[str] = []
    current_len = 0

    for word in filter(None, _WORD_SEP.split(text)):
        word_len = len(word)
        needed = word_len if not current_words else current_len + 1 + word_len
        if needed <= max_chars_per_line:
            current_words.append(word)
            current_len = needed
        else:
            if current_words:
                lines.append(" ".join(current_words))
            current_words = [word]
            current_len = word_len

    if current_words:
        lines.append(" ".join(current_words))

    return CRLF.join(lines)


_BREAKERS = {
    WrapMode.CJK: wrap_cjk,
    WrapMode.WORD: wrap_words,
}


def wrap(text: str, max_chars_per_line: int, mode: WrapMode) -> str:
    """Wrap *text* with an explicitly chosen breaker."""
    return _BREAKERS[mode](text, max_chars_per_line)


def justify(text: str, max_chars_per_line: int) -> str:
    """Wrap every logical line of *text* and join the result with CRLF.

    Blank (or whitespace-only) lines are kept as empty lines so the
    paragraph structure of the input survives.
    """
    justified: list[str] = []
    for line in split_logical_lines(text):
        trimmed = line.strip(WHITESPACE)
        if not trimmed:
            justified.append("")
            continue
        justified.append(wrap(trimmed, max_chars_per_line, WrapMode.for_line(trimmed)))
    return CRLF.join(justified)
