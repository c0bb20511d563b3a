"""
Unit Tests for QueueManager

Tests for:
- Delegation to the sequencing rules and returned snapshots
- Previous-button selection and the per-instance press clock
- Persistence hooks (fire-and-forget saves, unchanged states, failing stores)
- Restoring a manager from persisted state
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from conftest import FakeClock
from media_queue.application.services.queue_service import QueueManager
from media_queue.config.settings import QueueSettings
from media_queue.domain.music.value_objects import (
    InsertPosition,
    PreviousAction,
    QueueItemStatus,
    RepeatMode,
)
from media_queue.domain.shared.exceptions import PersistenceError
from media_queue.infrastructure.persistence.queue_persistence import QueueStatePersistence


@pytest.fixture
def mock_persistence():
    """Mock persistence adapter."""
    mock = MagicMock()
    mock.save_in_background = MagicMock()
    mock.clear_in_background = MagicMock()
    return mock


@pytest.fixture
def tracked_manager(mock_persistence, clock, rng):
    """Manager wired to a mock persistence adapter."""
    return QueueManager(persistence=mock_persistence, clock=clock, rng=rng)


# =============================================================================
# Queries and basic commands
# =============================================================================


class TestQueueManagerBasics:
    """Unit tests for QueueManager queries and commands."""

    def test_starts_empty(self, manager):
        assert manager.get_current_track() is None
        assert manager.peek_next_track() is None
        assert manager.get_visible_queue() == []
        assert manager.is_shuffled is False
        assert manager.repeat_mode == RepeatMode.NONE

    def test_create_and_advance(self, manager, abc_tracks, album_source, track_a, track_b, track_c):
        manager.create_queue(abc_tracks, album_source)

        assert manager.get_current_track() == track_a
        assert manager.peek_next_track() == track_b
        assert manager.advance_to_next() == track_b
        assert manager.advance_to_next() == track_c
        assert manager.advance_to_next() is None
        assert manager.get_current_track() == track_c

    def test_manual_queue_first(self, manager, abc_tracks, album_source, track_b, track_x):
        manager.create_queue(abc_tracks, album_source, start_index=1)
        manager.add_to_queue(track_x, "next")

        assert manager.advance_to_next() == track_x
        assert manager.state.current_index == 1
        assert manager.get_current_track() == track_b

    def test_get_state_is_snapshot(self, manager, abc_tracks, album_source, track_x):
        manager.create_queue(abc_tracks, album_source)
        snapshot = manager.get_state()
        snapshot.upcoming_manual.append(track_x)
        snapshot.current_order.clear()

        assert manager.state.upcoming_manual == []
        assert len(manager.state.current_order) == 3

    def test_toggle_shuffle(self, manager, abc_tracks, album_source, track_b):
        manager.create_queue(abc_tracks, album_source, start_index=1)

        assert manager.toggle_shuffle() is True
        assert manager.get_current_track() == track_b
        assert manager.state.current_index == 0

        assert manager.toggle_shuffle() is False
        assert manager.state.current_index == 1
        assert manager.state.current_order == manager.state.original_order

    def test_shuffle_carries_over_new_queue_when_requested(self, manager, abc_tracks, album_source):
        manager.create_queue(abc_tracks, album_source, shuffle=True)
        assert manager.is_shuffled is True

    def test_set_repeat_mode(self, manager):
        manager.set_repeat_mode("one")
        assert manager.repeat_mode == RepeatMode.ONE
        manager.set_repeat_mode(RepeatMode.ALL)
        assert manager.repeat_mode == RepeatMode.ALL

    def test_repeat_mode_survives_new_queue(self, manager, abc_tracks, album_source):
        manager.set_repeat_mode(RepeatMode.ALL)
        manager.create_queue(abc_tracks, album_source)
        assert manager.repeat_mode == RepeatMode.ALL

    def test_remove_current_returns_false(self, manager, abc_tracks, album_source):
        manager.create_queue(abc_tracks, album_source, start_index=1)
        before = manager.get_state()

        assert manager.remove_from_queue("b") is False
        assert manager.state == before

    def test_remove_logs_warning(self, manager, abc_tracks, album_source, caplog):
        manager.create_queue(abc_tracks, album_source)
        with caplog.at_level(logging.WARNING):
            manager.remove_from_queue("missing")
            manager.remove_from_queue("a")

        assert "not found" in caplog.text
        assert "currently playing" in caplog.text

    def test_remove_and_jump(self, manager, abc_tracks, album_source, track_c):
        manager.create_queue(abc_tracks, album_source)
        assert manager.remove_from_queue("b") is True
        assert manager.jump_to_track("c") == track_c
        assert manager.jump_to_track("b") is None

    def test_reorder(self, manager, abc_tracks, album_source):
        manager.create_queue(abc_tracks, album_source)
        assert manager.reorder_queue("c", 1) is True
        assert [str(t.id) for t in manager.state.current_order] == ["a", "c", "b"]
        assert manager.reorder_queue("a", 2) is False

    def test_visible_queue_and_stats(self, manager, abc_tracks, album_source, track_x):
        manager.create_queue(abc_tracks, album_source)
        manager.add_to_queue(track_x, InsertPosition.END)

        items = manager.get_visible_queue()
        stats = manager.get_stats()

        assert items[0].status == QueueItemStatus.PLAYING
        assert items[1].track == track_x
        assert stats.total == 3
        assert stats.current == 1
        assert stats.manual == 1

    def test_clear(self, manager, abc_tracks, album_source):
        manager.create_queue(abc_tracks, album_source)
        manager.clear()
        assert manager.get_current_track() is None
        assert manager.state.original_order == []


# =============================================================================
# Previous button
# =============================================================================


class TestPreviousSelection:
    """Unit tests for QueueManager.get_previous_selection."""

    def test_scenario_restart_then_previous(self, manager, abc_tracks, album_source, track_a, track_b):
        manager.create_queue(abc_tracks, album_source, start_index=1)

        first = manager.get_previous_selection(15)
        assert first.action == PreviousAction.RESTART
        assert first.track == track_b
        assert manager.state.current_index == 1

        second = manager.get_previous_selection(5)
        assert second.action == PreviousAction.PREVIOUS
        assert second.track == track_a
        assert manager.state.current_index == 0

    def test_previous_at_start_has_no_track(self, manager, abc_tracks, album_source):
        manager.create_queue(abc_tracks, album_source)
        selection = manager.get_previous_selection(2)
        assert selection.action == PreviousAction.PREVIOUS
        assert selection.track is None

    def test_threshold_is_inclusive(self, manager, abc_tracks, album_source):
        manager.create_queue(abc_tracks, album_source, start_index=2)
        assert manager.get_previous_selection(10).action == PreviousAction.PREVIOUS
        assert manager.get_previous_selection(10.5).action == PreviousAction.RESTART

    def test_restart_even_within_double_click_window(self, manager, clock, abc_tracks, album_source):
        """Elapsed time past the threshold always restarts."""
        manager.create_queue(abc_tracks, album_source, start_index=2)
        manager.get_previous_selection(1)
        clock.advance_ms(200)
        assert manager.get_previous_selection(30).is_restart

    def test_records_press_time_on_instance(self, manager, clock):
        assert manager.last_previous_press_ms is None
        manager.get_previous_selection(0)
        assert manager.last_previous_press_ms == pytest.approx(clock.now * 1000)

        clock.advance_ms(1500)
        manager.get_previous_selection(0)
        assert manager.last_previous_press_ms == pytest.approx(clock.now * 1000)

    def test_press_time_not_shared_between_managers(self, clock):
        first = QueueManager(clock=clock)
        second = QueueManager(clock=FakeClock(start=5.0))

        first.get_previous_selection(0)

        assert first.last_previous_press_ms is not None
        assert second.last_previous_press_ms is None

    def test_thresholds_from_settings(self, clock, abc_tracks, album_source):
        manager = QueueManager(
            settings=QueueSettings(restart_threshold_seconds=3, double_click_window_ms=500),
            clock=clock,
        )
        manager.create_queue(abc_tracks, album_source, start_index=1)

        assert manager.get_previous_selection(5).is_restart
        assert not manager.get_previous_selection(2).is_restart

    def test_shuffled_previous_retraces_history(self, manager, abc_tracks, album_source):
        manager.create_queue(abc_tracks, album_source, shuffle=True)
        first = manager.get_current_track()
        manager.advance_to_next()

        selection = manager.get_previous_selection(1)

        assert selection.track == first
        assert manager.get_current_track() == first


# =============================================================================
# Persistence hooks
# =============================================================================


class TestPersistenceHooks:
    """Unit tests for when QueueManager hands state to persistence."""

    def test_mutations_save(self, tracked_manager, mock_persistence, abc_tracks, album_source, track_x):
        tracked_manager.create_queue(abc_tracks, album_source)
        tracked_manager.advance_to_next()
        tracked_manager.toggle_shuffle()
        tracked_manager.set_repeat_mode("all")
        tracked_manager.add_to_queue(track_x)

        assert mock_persistence.save_in_background.call_count == 5
        saved_state = mock_persistence.save_in_background.call_args[0][0]
        assert saved_state.upcoming_manual == [track_x]

    def test_unchanged_state_not_saved(self, tracked_manager, mock_persistence, abc_tracks, album_source):
        tracked_manager.create_queue(abc_tracks, album_source, start_index=2)
        mock_persistence.save_in_background.reset_mock()

        assert tracked_manager.advance_to_next() is None
        assert tracked_manager.remove_from_queue("c") is False
        assert tracked_manager.jump_to_track("zzz") is None
        assert tracked_manager.reorder_queue("zzz", 0) is False

        mock_persistence.save_in_background.assert_not_called()

    def test_restart_not_saved(self, tracked_manager, mock_persistence, abc_tracks, album_source):
        tracked_manager.create_queue(abc_tracks, album_source, start_index=1)
        mock_persistence.save_in_background.reset_mock()

        tracked_manager.get_previous_selection(30)

        mock_persistence.save_in_background.assert_not_called()

    def test_empty_create_still_saved(self, tracked_manager, mock_persistence, album_source):
        tracked_manager.create_queue([], album_source)
        mock_persistence.save_in_background.assert_called_once()

    def test_clear_saves_empty_state(self, tracked_manager, mock_persistence, abc_tracks, album_source):
        tracked_manager.create_queue(abc_tracks, album_source)
        tracked_manager.clear()
        saved_state = mock_persistence.save_in_background.call_args[0][0]
        assert saved_state.current_order == []

    def test_clear_saved_queue_keeps_memory(self, tracked_manager, mock_persistence, abc_tracks, album_source, track_a):
        tracked_manager.create_queue(abc_tracks, album_source)
        tracked_manager.clear_saved_queue()

        mock_persistence.clear_in_background.assert_called_once()
        assert tracked_manager.get_current_track() == track_a

    def test_without_event_loop_writes_inline(self, persistence, memory_store, abc_tracks, album_source):
        """Sync callers get the write completed before the call returns."""
        manager = QueueManager(persistence=persistence)
        manager.create_queue(abc_tracks, album_source)

        snapshot = memory_store.snapshot()
        assert snapshot["queue.version"] == "1.0"
        assert '"current_index": 0' in snapshot["queue.state"]

    @pytest.mark.asyncio
    async def test_background_writes_last_wins(self, persistence, memory_store, abc_tracks, album_source):
        manager = QueueManager(persistence=persistence)
        manager.create_queue(abc_tracks, album_source)
        manager.advance_to_next()
        manager.advance_to_next()

        await persistence.flush()

        restored = await persistence.load()
        assert restored == manager.state
        assert restored.current_index == 2

    @pytest.mark.asyncio
    async def test_failing_store_never_raises(self, abc_tracks, album_source, caplog):
        store = AsyncMock()
        store.set.side_effect = PersistenceError("write", "queue.state")
        store.delete.side_effect = PersistenceError("delete", "queue.state")
        persistence = QueueStatePersistence(store)
        manager = QueueManager(persistence=persistence)

        with caplog.at_level(logging.ERROR):
            manager.create_queue(abc_tracks, album_source)
            manager.advance_to_next()
            manager.clear_saved_queue()
            await persistence.flush()

        assert manager.state.current_index == 1
        assert "Failed to save queue state" in caplog.text
        assert "Failed to clear saved queue state" in caplog.text

    def test_encode_failure_never_raises(self, persistence, memory_store, abc_tracks, album_source, caplog):
        """A payload that cannot be serialized is logged and the queue still changes."""
        with (
            patch.object(persistence, "encode", side_effect=RuntimeError("unserializable")),
            caplog.at_level(logging.ERROR),
        ):
            manager = QueueManager(persistence=persistence)
            manager.create_queue(abc_tracks, album_source)
            manager.advance_to_next()

        assert manager.state.current_index == 1
        assert memory_store.snapshot() == {}
        assert "Failed to save queue state" in caplog.text


# =============================================================================
# Restore
# =============================================================================


class TestRestore:
    """Unit tests for QueueManager.restore."""

    @pytest.mark.asyncio
    async def test_restore_round_trip(self, persistence, abc_tracks, album_source, track_x):
        original = QueueManager(persistence=persistence)
        original.create_queue(abc_tracks, album_source, shuffle=True, start_index=1)
        original.add_to_queue(track_x)
        original.set_repeat_mode("one")
        await persistence.flush()

        restored = await QueueManager.restore(persistence)

        assert restored.state == original.state
        assert restored.repeat_mode == RepeatMode.ONE
        assert restored.is_shuffled is True

    @pytest.mark.asyncio
    async def test_restore_empty_store(self, persistence):
        restored = await QueueManager.restore(persistence)
        assert restored.get_current_track() is None
        assert restored.state.current_order == []

    @pytest.mark.asyncio
    async def test_restored_manager_keeps_saving(self, persistence, memory_store, abc_tracks, album_source):
        restored = await QueueManager.restore(persistence)
        restored.create_queue(abc_tracks, album_source)
        await persistence.flush()
        assert "queue.state" in memory_store.snapshot()
