"""Playback History Service - recently played tracks and the resume point."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...domain.music.entities import LastPlayed, Track
from ...domain.music.history import push_recently_played
from ...domain.shared.constants import HistoryConstants

if TYPE_CHECKING:
    from ...config.settings import HistorySettings
    from ...infrastructure.persistence.history_persistence import PlaybackHistoryPersistence


class PlaybackHistory:
    """Remembers what was played so a client can list it or pick up where it left off.

    Every change is handed to the persistence adapter without waiting for
    the write, the same way ``QueueManager`` saves the queue.
    """

    def __init__(
        self,
        *,
        persistence: PlaybackHistoryPersistence | None = None,
        settings: HistorySettings | None = None,
        recent: list[Track] | None = None,
        last_played: LastPlayed | None = None,
    ) -> None:
        self._persistence = persistence
        self._limit = settings.recent_limit if settings else HistoryConstants.RECENT_LIMIT
        self._resume_min_position = (
            settings.resume_min_position_seconds
            if settings
            else HistoryConstants.RESUME_MIN_POSITION_SECONDS
        )
        self._recent = list(recent or [])[: self._limit]
        self._last_played = last_played

    @classmethod
    async def restore(
        cls,
        persistence: PlaybackHistoryPersistence,
        *,
        settings: HistorySettings | None = None,
    ) -> PlaybackHistory:
        """Build the history from what was persisted, or an empty one."""
        return cls(
            persistence=persistence,
            settings=settings,
            recent=await persistence.load_recent(),
            last_played=await persistence.load_last_played(),
        )

    @property
    def recently_played(self) -> list[Track]:
        """Most recent first; a copy, so callers cannot reorder the history."""
        return list(self._recent)

    @property
    def last_played(self) -> LastPlayed | None:
        return self._last_played

    def record_played(self, track: Track) -> None:
        self._recent = push_recently_played(self._recent, track, self._limit)
        if self._persistence is not None:
            self._persistence.save_recent_in_background(self._recent)

    def record_progress(self, track: Track, position_seconds: float) -> bool:
        """Remember ``track`` as the resume point once it is far enough in.

        Returns:
            True if the resume point was updated.
        """
        if position_seconds <= self._resume_min_position:
            return False

        self._last_played = LastPlayed(track=track, position_seconds=position_seconds)
        if self._persistence is not None:
            self._persistence.save_last_played_in_background(self._last_played)
        return True
