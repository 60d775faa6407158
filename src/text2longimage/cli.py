"""CLI entry point for text2longimage.

Every subcommand reads its text from a file argument or stdin (``-``).
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import IO, Any, NoReturn

import click

from text2longimage import __version__
from text2longimage.config.paths import CONFIG_FILE, HISTORY_DB, ensure_dirs
from text2longimage.config.settings import Settings
from text2longimage.services.batch import (
    DecodeError,
    EncodeError,
    batch_justify,
    validate_text_input,
)
from text2longimage.services.history import TextHistory
from text2longimage.services.processor import TextProcessor
from text2longimage.services.stats import get_text_stats
from text2longimage.utils.charclass import measure_width
from text2longimage.utils.formatting import (
    copy_to_clipboard,
    format_ago,
    format_size,
    truncate,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json_output(data: Any, *, compact: bool = False) -> None:
    """Print *data* as JSON to stdout."""
    indent = None if compact else 2
    click.echo(json.dumps(data, indent=indent, ensure_ascii=False, default=str))


def _error(msg: str) -> NoReturn:
    """Print an error message to stderr and exit with code 1."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _read_text(stream: IO[bytes]) -> str:
    """Decode *stream* as UTF-8 without newline translation."""
    try:
        return stream.read().decode("utf-8")
    except UnicodeDecodeError as exc:
        _error(f"Input is not valid UTF-8: {exc}")


def _read_valid_text(stream: IO[bytes], settings: Settings) -> str:
    text = _read_text(stream)
    reason = validate_text_input(text, settings.justify.max_input_chars)
    if reason:
        _error(reason)
    return text


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


def _history(ctx: click.Context) -> TextHistory:
    return TextHistory(db_path=ctx.obj["history_db"], max_entries=_settings(ctx).history.max_entries)


async def _with_history(history: TextHistory, method: str, *args: Any) -> Any:
    """Open *history*, call one of its coroutine methods, and close it again."""
    await history.init()
    try:
        return await getattr(history, method)(*args)
    finally:
        await history.close()


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="text2longimage")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=CONFIG_FILE,
    show_default=True,
    help="Path to the TOML config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: Path, verbose: bool) -> None:
    """text2longimage -- wrap text for fixed-width long images."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    ensure_dirs()
    ctx.ensure_object(dict)
    ctx.obj["settings"] = Settings.load(config_path)
    ctx.obj["history_db"] = HISTORY_DB


# ---------------------------------------------------------------------------
# Justification
# ---------------------------------------------------------------------------


@main.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--width", "-w", type=int, default=None, help="Width budget in width units.")
@click.option("--chunk-size", type=int, default=None, help="Chunk size in bytes.")
@click.option("--copy", is_flag=True, help="Also copy the result to the clipboard.")
@click.pass_context
def justify(
    ctx: click.Context,
    source: IO[bytes],
    width: int | None,
    chunk_size: int | None,
    copy: bool,
) -> None:
    """Wrap SOURCE (a file, or - for stdin) and print the result."""
    settings = _settings(ctx)
    text = _read_valid_text(source, settings)
    processor = TextProcessor(
        direct_limit=settings.justify.direct_limit,
        chunk_size=chunk_size if chunk_size is not None else settings.justify.chunk_size,
    )
    result = processor.justify(
        text, width if width is not None else settings.justify.max_chars_per_line
    ).justified_text
    click.echo(result)
    if copy and not copy_to_clipboard(result):
        click.echo("Warning: no clipboard helper (xclip, xsel, wl-copy) available.", err=True)


@main.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--width", "-w", type=int, default=None, help="Width budget in width units.")
@click.pass_context
def batch(ctx: click.Context, source: IO[bytes], width: int | None) -> None:
    """Justify every string of a JSON array read from SOURCE."""
    settings = _settings(ctx)
    try:
        output = batch_justify(
            _read_text(source),
            width if width is not None else settings.justify.max_chars_per_line,
        )
    except (DecodeError, EncodeError) as exc:
        _error(str(exc))
    click.echo(output)


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------


@main.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--json", "compact_json", is_flag=True, help="Compact JSON output.")
def stats(source: IO[bytes], compact_json: bool) -> None:
    """Show character, byte, line and CJK counts for SOURCE."""
    result = get_text_stats(_read_text(source))

    if compact_json:
        _json_output(result.to_dict(), compact=True)
    else:
        click.echo(f"Characters:    {result.char_count}")
        click.echo(f"Bytes:         {result.byte_count} ({format_size(result.byte_count)})")
        click.echo(f"Lines:         {result.line_count}")
        click.echo(f"CJK chars:     {result.cjk_count}")
        click.echo(f"Latin-1 chars: {result.ascii_count}")
        click.echo(f"Display width: {result.display_width}")


@main.command()
@click.argument("text")
def width(text: str) -> None:
    """Print the display width of TEXT."""
    click.echo(measure_width(text))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@main.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--dark/--light", "dark_mode", default=None, help="Colour scheme.")
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write the PNG into.",
)
@click.option(
    "--chars-per-line",
    type=click.IntRange(min=1),
    default=None,
    help="Wide characters per line.",
)
@click.pass_context
def render(
    ctx: click.Context,
    source: IO[bytes],
    dark_mode: bool | None,
    output_dir: Path | None,
    chars_per_line: int | None,
) -> None:
    """Render SOURCE as a long PNG image and print its path."""
    from dataclasses import replace

    from text2longimage.services.render import render_image, save_image

    settings = _settings(ctx)
    text = _read_valid_text(source, settings)

    try:
        config = settings.image.to_image_config()
    except ValueError as exc:
        _error(f"Invalid [image] settings: {exc}")
    if chars_per_line is not None:
        config = replace(config, chars_per_line=chars_per_line)

    try:
        image = render_image(
            text,
            config,
            dark_mode=settings.image.dark_mode if dark_mode is None else dark_mode,
        )
        path = save_image(image, output_dir or settings.output_dir)
    except OSError as exc:
        _error(f"Failed to render image: {exc}")

    if settings.history.enabled:
        asyncio.run(_with_history(_history(ctx), "save", text))

    click.echo(str(path))


# ---------------------------------------------------------------------------
# History group
# ---------------------------------------------------------------------------


def _list_history(ctx: click.Context, limit: int | None, compact_json: bool) -> None:
    entries = asyncio.run(_with_history(_history(ctx), "get_entries", limit))
    if compact_json:
        _json_output(entries, compact=True)
        return
    if not entries:
        click.echo("No saved texts.")
        return
    for entry in entries:
        preview = truncate(" ".join(entry["text"].split()), 60)
        saved = format_ago(datetime.fromisoformat(entry["saved_at"]))
        click.echo(f"{entry['id']:>4}  {saved:<16}  {preview}")


_limit_option = click.option(
    "--limit", "-l", type=int, default=None, help="Number of history entries."
)
_json_option = click.option("--json", "compact_json", is_flag=True, help="Compact JSON output.")


@main.group(invoke_without_command=True)
@_limit_option
@_json_option
@click.pass_context
def history(ctx: click.Context, limit: int | None, compact_json: bool) -> None:
    """List saved texts, newest first."""
    if ctx.invoked_subcommand is None:
        _list_history(ctx, limit, compact_json)


@history.command("list")
@_limit_option
@_json_option
@click.pass_context
def history_list(ctx: click.Context, limit: int | None, compact_json: bool) -> None:
    """List saved texts, newest first."""
    _list_history(ctx, limit, compact_json)


@history.command("show")
@click.argument("entry_id", type=int)
@click.pass_context
def history_show(ctx: click.Context, entry_id: int) -> None:
    """Print the full text of history entry ENTRY_ID."""
    entry = asyncio.run(_with_history(_history(ctx), "get", entry_id))
    if entry is None:
        _error(f"No history entry with id {entry_id}.")
    click.echo(entry["text"])


@history.command("delete")
@click.argument("entry_id", type=int)
@click.pass_context
def history_delete(ctx: click.Context, entry_id: int) -> None:
    """Delete history entry ENTRY_ID."""
    if not asyncio.run(_with_history(_history(ctx), "delete", entry_id)):
        _error(f"No history entry with id {entry_id}.")
    click.echo(f"Deleted entry {entry_id}.")


@history.command("clear")
@click.confirmation_option(prompt="Delete ALL saved texts? This cannot be undone.")
@click.pass_context
def history_clear(ctx: click.Context) -> None:
    """Delete every saved text."""
    removed = asyncio.run(_with_history(_history(ctx), "clear"))
    click.echo(f"Cleared {removed} saved text(s).")
