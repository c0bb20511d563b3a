"""SQLite implementation of the key-value store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import aiosqlite

from media_queue.domain.music.repository import KeyValueStore
from media_queue.domain.shared.exceptions import PersistenceError

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore(KeyValueStore):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def _ensure_ready(self) -> None:
        if not self._db.is_initialized:
            await self._db.initialize()

    async def get(self, key: str) -> str | None:
        try:
            await self._ensure_ready()
            row = await self._db.fetch_one("SELECT value FROM kv_store WHERE key = ?", (key,))
        except aiosqlite.Error as e:
            raise PersistenceError("read", key) from e

        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        try:
            await self._ensure_ready()
            await self._db.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, strftime('%Y-%m-%dT%H:%M:%f','now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
        except aiosqlite.Error as e:
            raise PersistenceError("write", key) from e

        logger.debug("Stored %d bytes under %s", len(value), key)

    async def delete(self, key: str) -> bool:
        try:
            await self._ensure_ready()
            deleted = await self._db.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        except aiosqlite.Error as e:
            raise PersistenceError("delete", key) from e

        return deleted > 0

    async def keys(self) -> list[str]:
        await self._ensure_ready()
        rows = await self._db.fetch_all("SELECT key FROM kv_store ORDER BY key ASC")
        return [row["key"] for row in rows]
