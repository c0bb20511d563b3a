"""Queue Application Service - owns the live queue state.

``QueueManager`` is the single mutable holder of ``QueueState``. Each
operation runs a pure transition from ``QueueDomainService``, swaps in the
resulting state and hands it to the persistence adapter without waiting for
the write. Nothing here raises for misuse; callers check for ``None`` or
``False`` results.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, TypeVar

from ...domain.music.entities import (
    PreviousSelection,
    QueueItem,
    QueueSource,
    QueueState,
    QueueStats,
    Track,
    create_empty_state,
)
from ...domain.music.services import QueueDomainService, Transition
from ...domain.music.value_objects import InsertPosition, PreviousAction, RepeatMode, TrackId
from ...domain.shared.constants import QueueConstants
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...config.settings import QueueSettings
    from ...infrastructure.persistence.queue_persistence import QueueStatePersistence

logger = logging.getLogger(__name__)

R = TypeVar("R")


class QueueManager:
    """Holds the queue state and exposes every queue operation."""

    def __init__(
        self,
        *,
        persistence: QueueStatePersistence | None = None,
        settings: QueueSettings | None = None,
        initial_state: QueueState | None = None,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        self._persistence = persistence
        self._state = initial_state if initial_state is not None else create_empty_state()
        self._clock = clock
        self._rng = rng

        self._restart_threshold = (
            settings.restart_threshold_seconds
            if settings
            else QueueConstants.RESTART_THRESHOLD_SECONDS
        )
        self._double_click_window_ms = (
            settings.double_click_window_ms if settings else QueueConstants.DOUBLE_CLICK_WINDOW_MS
        )

        # Clock reading (ms) of the last previous-button press, per manager.
        self._last_previous_ms: float | None = None

    @classmethod
    async def restore(
        cls,
        persistence: QueueStatePersistence,
        *,
        settings: QueueSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> QueueManager:
        """Build a manager from the persisted state, or an empty one."""
        state = await persistence.load()
        return cls(
            persistence=persistence,
            settings=settings,
            initial_state=state,
            clock=clock,
            rng=rng,
        )

    def _apply(self, transition: Transition[R], *, persist: bool | None = None) -> R:
        if transition.changed:
            self._state = transition.state
        should_persist = transition.changed if persist is None else persist
        if should_persist:
            self._persist()
        return transition.result

    def _persist(self) -> None:
        if self._persistence is not None:
            self._persistence.save_in_background(self._state)

    # ---- Queries ----

    @property
    def state(self) -> QueueState:
        return self._state

    @property
    def last_previous_press_ms(self) -> float | None:
        return self._last_previous_ms

    def get_state(self) -> QueueState:
        """Snapshot of the current state; mutating it does not affect the queue."""
        return self._state.clone()

    def get_current_track(self) -> Track | None:
        return self._state.current_track

    def peek_next_track(self) -> Track | None:
        return QueueDomainService.peek_next(self._state)

    def get_visible_queue(self) -> list[QueueItem]:
        return QueueDomainService.visible_queue(self._state)

    def get_stats(self) -> QueueStats:
        return QueueDomainService.stats(self._state)

    @property
    def is_shuffled(self) -> bool:
        return self._state.is_shuffled

    @property
    def repeat_mode(self) -> RepeatMode:
        return self._state.repeat_mode

    # ---- Commands ----

    def create_queue(
        self,
        tracks: Sequence[Track],
        source: QueueSource,
        shuffle: bool = False,
        start_index: int = 0,
    ) -> None:
        self._apply(
            QueueDomainService.create_queue(
                self._state, tracks, source, shuffle, start_index, self._rng
            ),
            persist=True,
        )
        logger.info(
            LogTemplates.QUEUE_CREATED,
            source.type.value,
            source.name or source.id,
            len(tracks),
            shuffle,
            self._state.current_index,
        )

    def advance_to_next(self) -> Track | None:
        from_manual = bool(self._state.upcoming_manual)
        track = self._apply(QueueDomainService.advance_to_next(self._state, self._rng))
        if track is None:
            logger.info(LogTemplates.QUEUE_EXHAUSTED)
        else:
            logger.info(LogTemplates.QUEUE_ADVANCED, track.title, "manual" if from_manual else "auto")
        return track

    def get_previous_selection(self, elapsed_seconds: float) -> PreviousSelection:
        """Decide whether the previous button restarts the track or goes back.

        More than the restart threshold into a track restarts it; otherwise,
        or when pressed again within the double-click window, the queue
        steps back one track.
        """
        now_ms = self._clock() * 1000
        last_ms = self._last_previous_ms
        self._last_previous_ms = now_ms
        is_double_click = last_ms is not None and now_ms - last_ms < self._double_click_window_ms

        if elapsed_seconds > self._restart_threshold:
            selection = PreviousSelection(
                action=PreviousAction.RESTART, track=self._state.current_track
            )
        elif elapsed_seconds <= self._restart_threshold or is_double_click:
            selection = PreviousSelection(
                action=PreviousAction.PREVIOUS,
                track=self._apply(QueueDomainService.move_to_previous(self._state)),
            )
        else:
            selection = PreviousSelection(
                action=PreviousAction.RESTART, track=self._state.current_track
            )

        logger.debug(
            LogTemplates.QUEUE_PREVIOUS,
            selection.action.value,
            selection.track.title if selection.track else None,
        )
        return selection

    def toggle_shuffle(self) -> bool:
        enabled = self._apply(QueueDomainService.toggle_shuffle(self._state, self._rng))
        logger.info(LogTemplates.QUEUE_SHUFFLE_TOGGLED, "enabled" if enabled else "disabled")
        return enabled

    def set_repeat_mode(self, mode: RepeatMode | str) -> None:
        self._apply(QueueDomainService.set_repeat_mode(self._state, mode))
        logger.info(LogTemplates.QUEUE_REPEAT_CHANGED, self._state.repeat_mode.value)

    def add_to_queue(
        self, track: Track, position: InsertPosition | str = InsertPosition.END
    ) -> None:
        self._apply(QueueDomainService.add_to_queue(self._state, track, position))
        logger.info(LogTemplates.QUEUE_ENQUEUED, track.title, InsertPosition(position).value)

    def remove_from_queue(self, track_id: TrackId | str) -> bool:
        current = self._state.current_track
        removed = self._apply(QueueDomainService.remove_from_queue(self._state, track_id))
        if removed:
            logger.info(LogTemplates.QUEUE_REMOVED, track_id)
        elif current is not None and current.has_id(track_id):
            logger.warning(LogTemplates.QUEUE_REMOVE_CURRENT, track_id)
        else:
            logger.warning(LogTemplates.QUEUE_REMOVE_MISSING, track_id)
        return removed

    def jump_to_track(self, track_id: TrackId | str) -> Track | None:
        track = self._apply(QueueDomainService.jump_to_track(self._state, track_id))
        if track is None:
            logger.warning(LogTemplates.QUEUE_JUMP_MISSING, track_id)
        else:
            logger.info(LogTemplates.QUEUE_JUMPED, track.title)
        return track

    def reorder_queue(self, from_track_id: TrackId | str, to_index: int) -> bool:
        moved = self._apply(
            QueueDomainService.reorder_queue(self._state, from_track_id, to_index)
        )
        if moved:
            logger.info(LogTemplates.QUEUE_REORDERED, from_track_id, to_index)
        else:
            logger.warning(LogTemplates.QUEUE_REORDER_REJECTED, from_track_id)
        return moved

    def clear(self) -> None:
        self._state = create_empty_state()
        self._persist()
        logger.info(LogTemplates.QUEUE_CLEARED)

    def clear_saved_queue(self) -> None:
        """Drop the persisted copy while leaving the in-memory queue alone."""
        if self._persistence is not None:
            self._persistence.clear_in_background()
