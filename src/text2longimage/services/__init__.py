"""Text processing services for text2longimage."""

from __future__ import annotations

from text2longimage.services.batch import (
    DecodeError,
    EncodeError,
    batch_justify,
    validate_text_input,
)
from text2longimage.services.chunking import justify_chunked
from text2longimage.services.justify import WrapMode, justify, wrap, wrap_cjk, wrap_words
from text2longimage.services.stats import TextStats, get_text_stats

__all__ = [
    "WrapMode",
    "justify",
    "wrap",
    "wrap_cjk",
    "wrap_words",
    "justify_chunked",
    "batch_justify",
    "validate_text_input",
    "DecodeError",
    "EncodeError",
    "TextStats",
    "get_text_stats",
]
