"""Batch justification over a JSON list of strings, plus input validation."""

from __future__ import annotations

import json
import logging

from text2longimage.services.justify import justify

logger = logging.getLogger(__name__)

MAX_INPUT_CHARS = 500_000


class DecodeError(ValueError):
    """Raised when the batch input is not a JSON array of strings."""


class EncodeError(ValueError):
    """Raised when the batch result cannot be serialized."""


def validate_text_input(text: str, max_chars: int = MAX_INPUT_CHARS) -> str:
    """Return an empty string if *text* is acceptable, else the reason it is not."""
    if not text:
        return "Text cannot be empty"
    if len(text) > max_chars:
        return f"Text too large: maximum {max_chars:,} characters supported"
    return ""


def justify_many(texts: list[str], max_chars_per_line: int) -> list[str]:
    return [justify(text, max_chars_per_line) for text in texts]


def decode_texts(texts_json: str | bytes) -> list[str]:
    try:
        data = json.loads(texts_json)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise DecodeError(f"Invalid JSON: expected an array, got {type(data).__name__}")
    for i, item in enumerate(data):
        if not isinstance(item, str):
            raise DecodeError(
                f"Invalid JSON: element {i} is {type(item).__name__}, expected string"
            )
    return data


def encode_texts(texts: list[str]) -> str:
    try:
        return json.dumps(texts, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"Serialization error: {exc}") from exc


def batch_justify(texts_json: str | bytes, max_chars_per_line: int) -> str:
    """Justify every string of a JSON array and return the results as a JSON array.

    Raises ``DecodeError`` or ``EncodeError``; nothing is returned on failure.
    """
    texts = decode_texts(texts_json)
    logger.debug("Batch justifying %d texts at width %d", len(texts), max_chars_per_line)
    return encode_texts(justify_many(texts, max_chars_per_line))
