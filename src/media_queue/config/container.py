"""Dependency Injection Container

Wires settings, the durable store, the persistence adapters, the queue
manager, the playback history and the playback controller. Components are created on first access
and cached for the lifetime of the container.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.interfaces.audio_player import AudioPlayer
    from ..application.interfaces.library_service import LibraryService
    from ..application.services.history_service import PlaybackHistory
    from ..application.services.playback_service import PlaybackController
    from ..application.services.queue_service import QueueManager
    from ..domain.music.repository import KeyValueStore
    from ..infrastructure.persistence.database import Database
    from ..infrastructure.persistence.history_persistence import PlaybackHistoryPersistence
    from ..infrastructure.persistence.queue_persistence import QueueStatePersistence
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    The audio player and library service are supplied by the host through
    ``set_audio_player`` / ``set_library_service``; everything else is built
    from settings.
    """

    settings: Settings

    # Host-provided ports
    _audio_player: AudioPlayer | None = None
    _library_service: LibraryService | None = None

    # Persistence layer
    _database: Database | None = None
    _kv_store: KeyValueStore | None = None
    _queue_persistence: QueueStatePersistence | None = None
    _history_persistence: PlaybackHistoryPersistence | None = None

    # Application services
    _queue_manager: QueueManager | None = None
    _playback_history: PlaybackHistory | None = None
    _playback_controller: PlaybackController | None = None

    def set_audio_player(self, player: AudioPlayer) -> None:
        self._audio_player = player

    def set_library_service(self, library: LibraryService) -> None:
        self._library_service = library

    @property
    def audio_player(self) -> AudioPlayer:
        if self._audio_player is None:
            raise RuntimeError("Audio player not set. Call set_audio_player() first.")
        return self._audio_player

    @property
    def library_service(self) -> LibraryService | None:
        return self._library_service

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    # === Repositories ===

    @property
    def kv_store(self) -> KeyValueStore:
        """Get the durable key-value store."""
        if self._kv_store is None:
            from ..infrastructure.persistence.repositories.kv_repository import (
                SQLiteKeyValueStore,
            )

            self._kv_store = SQLiteKeyValueStore(self.database)
        return self._kv_store

    @property
    def queue_persistence(self) -> QueueStatePersistence:
        """Get the queue state persistence adapter."""
        if self._queue_persistence is None:
            from ..infrastructure.persistence.queue_persistence import QueueStatePersistence

            self._queue_persistence = QueueStatePersistence(
                self.kv_store, settings=self.settings.queue
            )
        return self._queue_persistence

    @property
    def history_persistence(self) -> PlaybackHistoryPersistence:
        """Get the recently played / resume point persistence adapter."""
        if self._history_persistence is None:
            from ..infrastructure.persistence.history_persistence import (
                PlaybackHistoryPersistence,
            )

            self._history_persistence = PlaybackHistoryPersistence(
                self.kv_store, settings=self.settings.history
            )
        return self._history_persistence

    # === Application Services ===

    @property
    def queue_manager(self) -> QueueManager:
        """Get the queue manager.

        Starts empty unless ``initialize()`` restored a saved queue first.
        """
        if self._queue_manager is None:
            from ..application.services.queue_service import QueueManager

            self._queue_manager = QueueManager(
                persistence=self.queue_persistence,
                settings=self.settings.queue,
            )
        return self._queue_manager

    @property
    def playback_history(self) -> PlaybackHistory:
        """Get the playback history.

        Starts empty unless ``initialize()`` restored it first.
        """
        if self._playback_history is None:
            from ..application.services.history_service import PlaybackHistory

            self._playback_history = PlaybackHistory(
                persistence=self.history_persistence,
                settings=self.settings.history,
            )
        return self._playback_history

    @property
    def playback_controller(self) -> PlaybackController:
        """Get the playback controller."""
        if self._playback_controller is None:
            from ..application.services.playback_service import PlaybackController

            self._playback_controller = PlaybackController(
                queue_manager=self.queue_manager,
                audio_player=self.audio_player,
                library_service=self.library_service,
                history=self.playback_history,
            )
        return self._playback_controller

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Open the database and restore the persisted queue and playback history."""
        await self.database.initialize()

        if self._queue_manager is None:
            from ..application.services.queue_service import QueueManager

            self._queue_manager = await QueueManager.restore(
                self.queue_persistence, settings=self.settings.queue
            )

        if self._playback_history is None:
            from ..application.services.history_service import PlaybackHistory

            self._playback_history = await PlaybackHistory.restore(
                self.history_persistence, settings=self.settings.history
            )

    async def shutdown(self) -> None:
        """Wait for pending writes and release the database."""
        for persistence in (self._queue_persistence, self._history_persistence):
            if persistence is None:
                continue
            try:
                await persistence.flush()
            except Exception as exc:
                logger.warning("Failed flushing pending writes: %r", exc)

        if self._database is not None:
            await self._database.close()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
