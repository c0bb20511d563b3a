"""
Unit Tests for Dependency Injection Container

Tests for:
- Container initialization with settings
- Lazy initialization and caching of persistence components
- Audio player and library service management
- Lifecycle methods (initialize restores the saved queue and playback history, shutdown flushes)
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from media_queue.config.container import Container, create_container
from media_queue.config.settings import DatabaseSettings, QueueSettings, Settings


@pytest.fixture
def settings():
    """In-memory settings for container tests."""
    return Settings(
        _env_file=None,
        database=DatabaseSettings(url="sqlite:///:memory:"),
        queue=QueueSettings(restart_threshold_seconds=7),
    )


@pytest.fixture
def container(settings):
    return Container(settings=settings)


class TestContainerInitialization:
    """Unit tests for Container construction."""

    def test_create_container_factory(self, settings):
        container = create_container(settings)
        assert isinstance(container, Container)
        assert container.settings == settings


class TestLazyComponents:
    """Unit tests for lazily created components."""

    def test_database_cached(self, container):
        from media_queue.infrastructure.persistence.database import Database

        assert isinstance(container.database, Database)
        assert container.database is container.database
        assert container.database.db_path == ":memory:"

    def test_kv_store_uses_database(self, container):
        from media_queue.infrastructure.persistence.repositories.kv_repository import (
            SQLiteKeyValueStore,
        )

        assert isinstance(container.kv_store, SQLiteKeyValueStore)
        assert container.kv_store is container.kv_store

    def test_queue_persistence_cached(self, container):
        assert container.queue_persistence is container.queue_persistence
        assert container.queue_persistence.version == "1.0"

    def test_queue_manager_uses_settings(self, container, memory_store, abc_tracks, album_source):
        container._kv_store = memory_store
        manager = container.queue_manager
        manager.create_queue(abc_tracks, album_source, start_index=1)

        assert container.queue_manager is manager
        assert manager.get_previous_selection(8).is_restart

    def test_audio_player_required(self, container):
        with pytest.raises(RuntimeError, match="set_audio_player"):
            _ = container.audio_player

    def test_playback_controller(self, container):
        player = AsyncMock()
        library = AsyncMock()
        container.set_audio_player(player)
        container.set_library_service(library)

        controller = container.playback_controller

        assert controller is container.playback_controller
        assert controller.queue is container.queue_manager
        assert container.library_service is library

    def test_history_components(self, container, memory_store):
        container._kv_store = memory_store
        container.set_audio_player(AsyncMock())

        assert container.history_persistence is container.history_persistence
        assert container.history_persistence.version == "1.1"
        assert container.playback_history is container.playback_history
        assert container.playback_controller.history is container.playback_history


class TestLifecycle:
    """Unit tests for initialize/shutdown."""

    @pytest.mark.asyncio
    async def test_initialize_restores_saved_queue(self, container, abc_tracks, album_source):
        await container.database.initialize()
        first = container.queue_manager
        first.create_queue(abc_tracks, album_source, start_index=2)
        await container.queue_persistence.flush()

        fresh = Container(settings=container.settings)
        fresh._database = container.database
        try:
            await fresh.initialize()
            assert fresh.queue_manager.state == first.state
        finally:
            await container.shutdown()

    @pytest.mark.asyncio
    async def test_initialize_restores_playback_history(self, container, track_a, track_b):
        from media_queue.domain.music.entities import LastPlayed

        await container.database.initialize()
        history = container.playback_history
        history.record_played(track_a)
        history.record_played(track_b)
        history.record_progress(track_b, 30)
        await container.history_persistence.flush()

        fresh = Container(settings=container.settings)
        fresh._database = container.database
        try:
            await fresh.initialize()
            assert fresh.playback_history.recently_played == [track_b, track_a]
            assert fresh.playback_history.last_played == LastPlayed(track=track_b, position_seconds=30)
        finally:
            await container.shutdown()

    @pytest.mark.asyncio
    async def test_initialize_without_saved_queue(self, container):
        try:
            await container.initialize()
            assert container.database.is_initialized
            assert container.queue_manager.get_current_track() is None
        finally:
            await container.shutdown()

    @pytest.mark.asyncio
    async def test_shutdown_flushes_and_closes(self, container):
        persistence = MagicMock()
        persistence.flush = AsyncMock()
        history_persistence = MagicMock()
        history_persistence.flush = AsyncMock(side_effect=RuntimeError("gone"))
        database = MagicMock()
        database.close = AsyncMock()
        container._queue_persistence = persistence
        container._history_persistence = history_persistence
        container._database = database

        await container.shutdown()

        persistence.flush.assert_awaited_once()
        history_persistence.flush.assert_awaited_once()
        database.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_before_use(self, container):
        await container.shutdown()
