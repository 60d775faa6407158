"""Saved-text history using async SQLite."""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite

from text2longimage.config.paths import HISTORY_DB

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS text_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    text TEXT NOT NULL,
    saved_at TEXT DEFAULT (datetime('now'))
);
"""

DEFAULT_MAX_ENTRIES = 50


class TextHistory:
    """Most-recent-first list of texts the user has rendered."""

    def __init__(self, db_path: Path = HISTORY_DB, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self._db_path = db_path
        self._max_entries = max_entries
        self._db: aiosqlite.Connection | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def init(self) -> None:
        """Open the database and create tables if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self._db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.execute("PRAGMA journal_mode=WAL")
        await self._db.executescript(_SCHEMA)
        await self._db.commit()
        logger.info("History database initialised at %s", self._db_path)

    async def close(self) -> None:
        """Close the database connection."""
        if self._db is not None:
            await self._db.close()
            self._db = None

    def _conn(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("Database not initialized")
        return self._db

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    async def save(self, text: str) -> int | None:
        """Record *text* as the newest entry.

        Blank text and an exact repeat of the newest entry are ignored.
        Returns the new entry id, or None when nothing was stored.
        """
        db = self._conn()
        if not text.strip():
            return None

        async with db.execute(
            "SELECT text FROM text_history ORDER BY id DESC LIMIT 1"
        ) as cursor:
            newest = await cursor.fetchone()
        if newest is not None and newest["text"] == text:
            return None

        cursor = await db.execute("INSERT INTO text_history (text) VALUES (?)", (text,))
        entry_id = cursor.lastrowid
        await db.execute(
            """
            DELETE FROM text_history
            WHERE id NOT IN (
                SELECT id FROM text_history ORDER BY id DESC LIMIT ?
            )
            """,
            (self._max_entries,),
        )
        await db.commit()
        logger.debug("Saved history entry %s (%d chars)", entry_id, len(text))
        return entry_id

    async def get_entries(self, limit: int | None = None) -> list[dict]:
        """Return saved texts, newest first."""
        db = self._conn()
        async with db.execute(
            "SELECT id, text, saved_at FROM text_history ORDER BY id DESC LIMIT ?",
            (limit if limit is not None else self._max_entries,),
        ) as cursor:
            rows = await cursor.fetchall()
            return [dict(row) for row in rows]

    async def get(self, entry_id: int) -> dict | None:
        db = self._conn()
        async with db.execute(
            "SELECT id, text, saved_at FROM text_history WHERE id = ?",
            (entry_id,),
        ) as cursor:
            row = await cursor.fetchone()
            return dict(row) if row is not None else None

    async def delete(self, entry_id: int) -> bool:
        """Delete one entry. Returns False if it did not exist."""
        db = self._conn()
        cursor = await db.execute("DELETE FROM text_history WHERE id = ?", (entry_id,))
        await db.commit()
        return cursor.rowcount > 0

    async def clear(self) -> int:
        """Delete every entry and return how many were removed."""
        db = self._conn()
        cursor = await db.execute("DELETE FROM text_history")
        await db.commit()
        logger.info("Cleared %d history entries", cursor.rowcount)
        return cursor.rowcount
