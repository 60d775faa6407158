"""Request-level text processing.

Wraps the justification engine with the bookkeeping callers need: line
splitting, layout positions, timings, and the choice between direct and
chunked processing for long inputs.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from text2longimage.services.chunking import justify_chunked
from text2longimage.services.justify import CRLF, justify
from text2longimage.services.render import ImageConfig, LinePosition, calculate_line_positions
from text2longimage.utils.formatting import get_first_lines

logger = logging.getLogger(__name__)

DEFAULT_DIRECT_LIMIT = 2000
DEFAULT_CHUNK_SIZE = 65536
CLIPBOARD_PROCESS_THRESHOLD = 500
PREVIEW_LINES = 10

VALID_ACTIONS = frozenset({"justify", "batch", "clipboard", "positions"})


@dataclass
class ProcessResult:
    justified_text: str
    lines: list[str] = field(default_factory=list)
    line_positions: list[LinePosition] = field(default_factory=list)
    chunked: bool = False


@dataclass
class BatchItem:
    index: int
    justified_text: str
    lines: list[str]
    line_positions: list[LinePosition]
    processing_time: float  # milliseconds
    character_count: int


@dataclass
class ClipboardPreview:
    original_text: str
    preview: str
    is_long: bool
    line_count: int
    character_count: int
    processed: bool
    justified_text: str | None = None


class TextProcessor:
    """Handles justify / batch / clipboard / positions requests.

    Texts longer than *direct_limit* characters are justified in chunks of
    *chunk_size* bytes; for those, per-line layout is left to the caller.
    """

    def __init__(
        self,
        direct_limit: int = DEFAULT_DIRECT_LIMIT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._direct_limit = direct_limit
        self._chunk_size = chunk_size

    def justify(
        self,
        text: str,
        max_chars: int,
        config: ImageConfig | None = None,
    ) -> ProcessResult:
        start = time.perf_counter()
        if len(text) > self._direct_limit:
            result = ProcessResult(
                justified_text=justify_chunked(text, max_chars, self._chunk_size),
                chunked=True,
            )
        else:
            justified = justify(text, max_chars)
            lines = justified.split(CRLF)
            result = ProcessResult(
                justified_text=justified,
                lines=lines,
                line_positions=calculate_line_positions(lines, config or ImageConfig()),
            )
        logger.debug(
            "Justified %d chars (chunked=%s) in %.2f ms",
            len(text),
            result.chunked,
            (time.perf_counter() - start) * 1000,
        )
        return result

    def batch_process(
        self,
        operations: list[dict[str, Any]],
        progress: Callable[[int, int], None] | None = None,
    ) -> list[BatchItem]:
        """Justify each ``{"text", "max_chars", "config"?}`` operation in order."""
        results: list[BatchItem] = []
        total = len(operations)
        for index, op in enumerate(operations):
            start = time.perf_counter()
            text = op["text"]
            justified = justify(text, op["max_chars"])
            lines = justified.split(CRLF)
            positions = calculate_line_positions(lines, op.get("config") or ImageConfig())
            results.append(
                BatchItem(
                    index=index,
                    justified_text=justified,
                    lines=lines,
                    line_positions=positions,
                    processing_time=(time.perf_counter() - start) * 1000,
                    character_count=len(text),
                )
            )
            if progress is not None:
                progress(index + 1, total)
        return results

    def optimize_clipboard(self, text: str, max_chars: int) -> ClipboardPreview:
        """Build a preview of pasted text; only long pastes are justified up front."""
        line_count = len(text.split("\n"))
        processed = len(text) > CLIPBOARD_PROCESS_THRESHOLD
        return ClipboardPreview(
            original_text=text,
            preview=get_first_lines(text, PREVIEW_LINES),
            is_long=line_count > PREVIEW_LINES,
            line_count=line_count,
            character_count=len(text),
            processed=processed,
            justified_text=justify(text, max_chars) if processed else None,
        )

    def dispatch(self, action: str, data: dict[str, Any]) -> Any:
        if action not in VALID_ACTIONS:
            raise ValueError(f"Unknown action: {action!r}")
        match action:
            case "justify":
                return self.justify(data["text"], data["max_chars"], data.get("config"))
            case "batch":
                return self.batch_process(data["operations"])
            case "clipboard":
                return self.optimize_clipboard(data["text"], data["max_chars"])
            case "positions":
                return calculate_line_positions(data["lines"], data.get("config") or ImageConfig())
