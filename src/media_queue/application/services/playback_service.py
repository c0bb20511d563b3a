"""Playback Controller - drives the audio player from queue decisions."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

from ...domain.music.entities import PreviousSelection, QueueSource, Track
from ...domain.music.value_objects import RepeatMode, TrackId
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..interfaces.audio_player import AudioPlayer
    from ..interfaces.library_service import LibraryService
    from .history_service import PlaybackHistory
    from .queue_service import QueueManager

logger = logging.getLogger(__name__)


class PlaybackController:
    """Single owner of the queue manager for one playback session.

    Feeds the tracks the queue picks into the audio player, turns a
    "restart" decision into a seek to the start, and stops playback once the
    queue is exhausted. With a ``PlaybackHistory`` attached, every track that
    starts goes on the recently played list and progress samples keep the
    resume point current.
    """

    def __init__(
        self,
        *,
        queue_manager: QueueManager,
        audio_player: AudioPlayer,
        library_service: LibraryService | None = None,
        history: PlaybackHistory | None = None,
    ) -> None:
        self._queue = queue_manager
        self._player = audio_player
        self._library = library_service
        self._history = history
        self._now_playing: Track | None = None

    @property
    def queue(self) -> QueueManager:
        return self._queue

    @property
    def history(self) -> PlaybackHistory | None:
        return self._history

    @property
    def now_playing(self) -> Track | None:
        """Last track the audio player accepted, in or outside the queue."""
        return self._now_playing

    @staticmethod
    def is_track_finished(elapsed_seconds: float, duration_seconds: float | None) -> bool:
        """A track counts as finished once elapsed time reaches its known duration."""
        if not duration_seconds or duration_seconds <= 0:
            return False
        return elapsed_seconds >= duration_seconds

    async def play_source(
        self,
        source: QueueSource,
        *,
        tracks: Sequence[Track] | None = None,
        shuffle: bool | None = None,
        start_index: int = 0,
    ) -> Track | None:
        """Replace the queue with a source's tracks and start the first one.

        Tracks are fetched from the library unless given. Shuffle defaults
        to the current setting so it carries over between sources.
        """
        if tracks is None:
            if self._library is None:
                return None
            try:
                tracks = await self._library.get_tracks(source)
            except Exception as e:
                logger.error(LogTemplates.LIBRARY_ERROR, source.display_name, e)
                return None

        if shuffle is None:
            shuffle = self._queue.is_shuffled

        self._queue.create_queue(tracks, source, shuffle=shuffle, start_index=start_index)

        current = self._queue.get_current_track()
        if current is not None:
            await self._play(current)
        return current

    async def next_track(self) -> Track | None:
        """Skip forward; stops the player when nothing is left."""
        track = self._queue.advance_to_next()
        if track is None:
            logger.info(LogTemplates.PLAYBACK_STOPPED)
            self._now_playing = None
            await self._call("stop", self._player.stop)
            return None

        await self._play(track)
        return track

    async def on_progress(self, elapsed_seconds: float, duration_seconds: float | None) -> Track | None:
        """Handle a progress sample from the audio player.

        Advances when the current track has ended; otherwise updates the
        resume point.
        """
        if not self.is_track_finished(elapsed_seconds, duration_seconds):
            if self._history is not None and self._now_playing is not None:
                self._history.record_progress(self._now_playing, elapsed_seconds)
            return None
        return await self.next_track()

    async def resume_last_track(self) -> Track | None:
        """Play the remembered track and seek to where it stopped."""
        last = self._history.last_played if self._history is not None else None
        if last is None:
            logger.info(LogTemplates.PLAYBACK_NOTHING_TO_RESUME)
            return None

        logger.info(LogTemplates.PLAYBACK_RESUMING, last.track.title, last.position_seconds)
        if not await self._play(last.track):
            return None
        await self._call("seek", lambda: self._player.seek(last.position_seconds))
        return last.track

    async def previous_track(self, elapsed_seconds: float) -> PreviousSelection:
        selection = self._queue.get_previous_selection(elapsed_seconds)

        if selection.is_restart:
            logger.info(LogTemplates.PLAYBACK_RESTARTED)
            await self._call("seek", lambda: self._player.seek(0))
        elif selection.track is not None:
            await self._play(selection.track)
        else:
            logger.info(LogTemplates.PLAYBACK_NO_PREVIOUS)
            await self._call("seek", lambda: self._player.seek(0))

        return selection

    async def jump_to_track(self, track_id: TrackId | str) -> Track | None:
        """Play a queued track, or the bare track when it is not queued."""
        track = self._queue.jump_to_track(track_id)
        if track is not None:
            await self._play(track)
            return track

        if self._library is None:
            return None

        logger.info(LogTemplates.PLAYBACK_FALLBACK, track_id)
        try:
            track = await self._library.get_track(str(track_id))
        except Exception as e:
            logger.error(LogTemplates.LIBRARY_ERROR, track_id, e)
            return None

        if track is not None:
            await self._play(track)
        return track

    def toggle_shuffle(self) -> bool:
        return self._queue.toggle_shuffle()

    def cycle_repeat_mode(self) -> RepeatMode:
        """Step repeat mode none -> one -> all -> none."""
        new_mode = self._queue.repeat_mode.next_mode()
        self._queue.set_repeat_mode(new_mode)
        return new_mode

    async def _play(self, track: Track) -> bool:
        started = await self._call("play", lambda: self._player.play(track))
        if started:
            logger.info(LogTemplates.PLAYBACK_STARTED, track.title)
            self._now_playing = track
            if self._history is not None:
                self._history.record_played(track)
        return started

    async def _call(self, operation: str, action: Callable[[], Awaitable[bool]]) -> bool:
        try:
            return bool(await action())
        except Exception as e:
            logger.error(LogTemplates.PLAYBACK_ERROR, operation, e)
            return False
