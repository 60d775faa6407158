"""Chunked justification for very large inputs.

The input is cut into windows of at most ``chunk_size`` UTF-8 bytes and each
window is justified on its own.  Window ends are pulled back to the nearest
code-point boundary so no character is ever split, but a boundary can
still fall inside a word or a line; that word is then wrapped as two.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from text2longimage.services.justify import CRLF, justify

logger = logging.getLogger(__name__)


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def iter_chunks(text: str, chunk_size: int) -> Iterator[str]:
    """Yield consecutive slices of *text*, each at most *chunk_size* bytes when encoded.

    A window too small to hold the next code point is widened to exactly
    that one code point.
    """
    data = text.encode("utf-8")
    total = len(data)
    start = 0
    while start < total:
        end = min(start + max(chunk_size, 1), total)
        while end < total and _is_continuation(data[end]):
            end -= 1
        if end <= start:
            end = start + 1
            while end < total and _is_continuation(data[end]):
                end += 1
        yield data[start:end].decode("utf-8")
        start = end


def justify_chunked(text: str, max_chars_per_line: int, chunk_size: int) -> str:
    """Justify *text* chunk by chunk.

    Input that fits in a single chunk (or a non-positive *chunk_size*) is
    passed straight to ``justify``.  Otherwise each chunk's output is
    appended in order, with a CRLF inserted between chunks unless the
    previous output already ends with one.
    """
    if chunk_size <= 0 or len(text.encode("utf-8")) <= chunk_size:
        return justify(text, max_chars_per_line)

    parts: list[str] = []
    count = 0
    for chunk in iter_chunks(text, chunk_size):
        if parts and not parts[-1].endswith(CRLF):
            parts.append(CRLF)
        parts.append(justify(chunk, max_chars_per_line))
        count += 1

    logger.debug("Justified %d chunks of up to %d bytes", count, chunk_size)
    return "".join(parts)
