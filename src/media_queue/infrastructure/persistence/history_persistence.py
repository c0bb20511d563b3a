"""Persistence of the recently played list and the resume point.

The recently played list carries its own version tag. A missing or
different tag means the stored list predates the current track shape, so
it is dropped and the tag rewritten. The resume point is stored untagged
and is simply discarded when it no longer validates.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from media_queue.domain.music.entities import LastPlayed, Track
from media_queue.domain.shared.constants import HistoryConstants
from media_queue.domain.shared.exceptions import ValidationError
from media_queue.domain.shared.messages import ErrorMessages, LogTemplates
from media_queue.infrastructure.persistence.background import BackgroundWriter

if TYPE_CHECKING:
    from media_queue.config.settings import HistorySettings
    from media_queue.domain.music.repository import KeyValueStore

logger = logging.getLogger(__name__)

_TRACK_LIST = TypeAdapter(list[Track])


class PlaybackHistoryPersistence(BackgroundWriter):
    """Stores recently played tracks and the last played position."""

    def __init__(self, store: KeyValueStore, settings: HistorySettings | None = None) -> None:
        super().__init__()
        self._store = store
        if settings is None:
            self._version = HistoryConstants.SCHEMA_VERSION
            self._recent_key = HistoryConstants.RECENT_KEY
            self._recent_version_key = HistoryConstants.RECENT_VERSION_KEY
            self._last_played_key = HistoryConstants.LAST_PLAYED_KEY
        else:
            self._version = settings.schema_version
            self._recent_key = settings.recent_key
            self._recent_version_key = settings.recent_version_key
            self._last_played_key = settings.last_played_key

    @property
    def version(self) -> str:
        return self._version

    # ---- Encoding ----

    def encode_recent(self, tracks: Sequence[Track]) -> str:
        return json.dumps(_TRACK_LIST.dump_python(list(tracks), mode="json"))

    def decode_recent(self, raw: str) -> list[Track]:
        """Parse a stored recently played list.

        Raises:
            ValidationError: If the payload is not a list of valid tracks.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationError(str(e)) from e

        if not isinstance(data, list):
            raise ValidationError(ErrorMessages.RECENT_NOT_A_LIST)

        try:
            return _TRACK_LIST.validate_python(data)
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

    def encode_last_played(self, last_played: LastPlayed) -> str:
        return last_played.model_dump_json()

    def decode_last_played(self, raw: str) -> LastPlayed:
        try:
            return LastPlayed.model_validate_json(raw)
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

    # ---- Writes ----

    def save_recent_in_background(self, tracks: Sequence[Track]) -> None:
        payload = self._encode_or_log("recently played", lambda: self.encode_recent(tracks))
        if payload is None:
            return
        entries = ((self._recent_key, payload), (self._recent_version_key, self._version))
        self._run_in_background(lambda: self._write(entries, "recently played"))

    def save_last_played_in_background(self, last_played: LastPlayed) -> None:
        payload = self._encode_or_log("last played", lambda: self.encode_last_played(last_played))
        if payload is None:
            return
        entries = ((self._last_played_key, payload),)
        self._run_in_background(lambda: self._write(entries, "last played"))

    async def clear(self) -> None:
        """Delete the recently played list, its version tag and the resume point."""
        try:
            async with self._lock():
                for key in (self._recent_key, self._recent_version_key, self._last_played_key):
                    await self._store.delete(key)
        except Exception as e:
            logger.error(LogTemplates.HISTORY_CLEAR_FAILED, e)
            return
        logger.info(LogTemplates.HISTORY_CLEARED)

    def _encode_or_log(self, what: str, encode: Callable[[], str]) -> str | None:
        try:
            return encode()
        except Exception as e:
            logger.error(LogTemplates.HISTORY_SAVE_FAILED, what, e)
            return None

    async def _write(self, entries: tuple[tuple[str, str], ...], what: str) -> None:
        try:
            async with self._lock():
                for key, value in entries:
                    await self._store.set(key, value)
        except Exception as e:
            logger.error(LogTemplates.HISTORY_SAVE_FAILED, what, e)

    # ---- Reads ----

    async def load_recent(self) -> list[Track]:
        """Read the recently played list, most recent first.

        Returns:
            The stored tracks, or an empty list when nothing usable is stored.
        """
        try:
            raw = await self._store.get(self._recent_key)
            version = await self._store.get(self._recent_version_key)
        except Exception as e:
            logger.error(LogTemplates.HISTORY_LOAD_FAILED, e)
            return []

        if version != self._version:
            logger.info(LogTemplates.HISTORY_RECENT_RESET, version, self._version)
            await self._reset(self._recent_key, tag=True)
            return []

        if raw is None:
            return []

        try:
            return self.decode_recent(raw)
        except ValidationError as e:
            logger.warning(LogTemplates.HISTORY_DISCARDED, "recently played list", e.message)
            await self._reset(self._recent_key)
            return []

    async def load_last_played(self) -> LastPlayed | None:
        try:
            raw = await self._store.get(self._last_played_key)
        except Exception as e:
            logger.error(LogTemplates.HISTORY_LOAD_FAILED, e)
            return None

        if raw is None:
            return None

        try:
            return self.decode_last_played(raw)
        except ValidationError as e:
            logger.warning(LogTemplates.HISTORY_DISCARDED, "resume point", e.message)
            await self._reset(self._last_played_key)
            return None

    async def _reset(self, key: str, *, tag: bool = False) -> None:
        try:
            async with self._lock():
                await self._store.delete(key)
                if tag:
                    await self._store.set(self._recent_version_key, self._version)
        except Exception as e:
            logger.error(LogTemplates.HISTORY_CLEAR_FAILED, e)
