"""Domain service for queue sequencing rules.

Every operation here is a pure state transition: it takes a ``QueueState``,
never mutates it, and returns a ``Transition`` holding the next state and
the operation's result. Persistence and timing live in the application
layer.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from media_queue.domain.music.entities import (
    QueueItem,
    QueueSource,
    QueueState,
    QueueStats,
    Track,
)
from media_queue.domain.music.shuffle import shuffle_tracks
from media_queue.domain.music.value_objects import (
    InsertPosition,
    QueueItemStatus,
    RepeatMode,
    TrackId,
)

R = TypeVar("R")


@dataclass(frozen=True)
class Transition(Generic[R]):
    """Result of applying one operation to a queue state."""

    state: QueueState
    result: R
    changed: bool = True


def _find(tracks: Sequence[Track], track_id: TrackId | str) -> int:
    for index, track in enumerate(tracks):
        if track.has_id(track_id):
            return index
    return -1


class QueueDomainService:
    """Sequencing rules for the play queue."""

    @classmethod
    def create_queue(
        cls,
        state: QueueState,
        tracks: Sequence[Track],
        source: QueueSource,
        shuffle: bool = False,
        start_index: int = 0,
        rng: random.Random | None = None,
    ) -> Transition[None]:
        """Replace the queue wholesale, keeping only the repeat mode.

        When starting mid-way into a shuffled order, the tracks in front of
        the start position are seeded into the history so "previous" can
        walk back through them as if they had been played.
        """
        original = list(tracks)
        order = shuffle_tracks(original, rng) if shuffle else list(original)

        if order:
            index = min(max(start_index, 0), len(order) - 1)
        else:
            index = 0

        history = order[:index] if shuffle and index > 0 else []

        new_state = QueueState(
            source=source,
            original_order=original,
            current_order=order,
            current_index=index,
            played_history=history,
            upcoming_manual=[],
            is_shuffled=shuffle,
            repeat_mode=state.repeat_mode,
        )
        return Transition(new_state, None)

    @classmethod
    def peek_next(cls, state: QueueState) -> Track | None:
        """Return the track ``advance_to_next`` would produce, without moving."""
        if state.upcoming_manual:
            return state.upcoming_manual[0]

        if state.repeat_mode == RepeatMode.ONE:
            return state.current_track

        if state.current_index < len(state.current_order) - 1:
            return state.current_order[state.current_index + 1]

        if state.repeat_mode == RepeatMode.ALL and state.current_order:
            return state.current_order[0]

        return None

    @classmethod
    def advance_to_next(
        cls, state: QueueState, rng: random.Random | None = None
    ) -> Transition[Track | None]:
        """Advance playback, serving the manual queue before the automatic order."""
        current = state.current_track

        if state.upcoming_manual:
            new_state = state.clone()
            next_track = new_state.upcoming_manual.pop(0)
            if state.is_shuffled and current is not None:
                new_state.played_history.append(current)
            return Transition(new_state, next_track)

        if state.repeat_mode == RepeatMode.ONE:
            return Transition(state, current, changed=False)

        if state.current_index < len(state.current_order) - 1:
            new_state = state.clone(current_index=state.current_index + 1)
            if state.is_shuffled and current is not None:
                new_state.played_history.append(current)
            return Transition(new_state, new_state.current_track)

        if state.repeat_mode == RepeatMode.ALL and state.current_order:
            if state.is_shuffled:
                # A fresh loop gets a new order and starts with no history.
                new_state = state.clone(
                    current_order=shuffle_tracks(state.original_order, rng),
                    played_history=[],
                    current_index=0,
                )
            else:
                new_state = state.clone(current_index=0)
            return Transition(new_state, new_state.current_track)

        return Transition(state, None, changed=False)

    @classmethod
    def move_to_previous(cls, state: QueueState) -> Transition[Track | None]:
        """Step back one track, retracing shuffle history when there is any."""
        if state.is_shuffled and state.played_history:
            new_state = state.clone(current_index=0)
            previous_track = new_state.played_history.pop()
            # The old current track shifts back into the upcoming order.
            new_state.current_order.insert(0, previous_track)
            return Transition(new_state, previous_track)

        if state.current_index > 0:
            new_state = state.clone(current_index=state.current_index - 1)
            return Transition(new_state, new_state.current_track)

        if state.repeat_mode == RepeatMode.ALL and state.current_order:
            new_state = state.clone(current_index=len(state.current_order) - 1)
            return Transition(new_state, new_state.current_track)

        return Transition(state, None, changed=False)

    @classmethod
    def toggle_shuffle(
        cls, state: QueueState, rng: random.Random | None = None
    ) -> Transition[bool]:
        """Flip shuffle, keeping the current track playing in either direction."""
        current = state.current_track

        if state.is_shuffled:
            index = _find(state.original_order, current.id) if current is not None else -1
            new_state = state.clone(
                current_order=list(state.original_order),
                current_index=max(index, 0),
                played_history=[],
                is_shuffled=False,
            )
            return Transition(new_state, False)

        if current is not None:
            remaining = [t for t in state.original_order if not t.has_id(current.id)]
            order = [current, *shuffle_tracks(remaining, rng)]
        else:
            order = shuffle_tracks(state.original_order, rng)

        new_state = state.clone(
            current_order=order,
            current_index=0,
            played_history=[],
            is_shuffled=True,
        )
        return Transition(new_state, True)

    @classmethod
    def set_repeat_mode(cls, state: QueueState, mode: RepeatMode | str) -> Transition[None]:
        return Transition(state.clone(repeat_mode=RepeatMode(mode)), None)

    @classmethod
    def add_to_queue(
        cls,
        state: QueueState,
        track: Track,
        position: InsertPosition | str = InsertPosition.END,
    ) -> Transition[None]:
        new_state = state.clone()
        if InsertPosition(position) == InsertPosition.NEXT:
            new_state.upcoming_manual.insert(0, track)
        else:
            new_state.upcoming_manual.append(track)
        return Transition(new_state, None)

    @classmethod
    def remove_from_queue(cls, state: QueueState, track_id: TrackId | str) -> Transition[bool]:
        """Remove a track from the manual queue, or else from the automatic order.

        The currently playing track is never removed.
        """
        manual_index = _find(state.upcoming_manual, track_id)
        if manual_index >= 0:
            new_state = state.clone()
            del new_state.upcoming_manual[manual_index]
            return Transition(new_state, True)

        order_index = _find(state.current_order, track_id)
        if order_index < 0 or order_index == state.current_index:
            return Transition(state, False, changed=False)

        new_index = state.current_index
        if order_index < state.current_index:
            new_index -= 1

        new_state = state.clone(
            current_index=new_index,
            played_history=[t for t in state.played_history if not t.has_id(track_id)],
        )
        del new_state.current_order[order_index]
        return Transition(new_state, True)

    @classmethod
    def jump_to_track(
        cls, state: QueueState, track_id: TrackId | str
    ) -> Transition[Track | None]:
        """Make the given queued track current.

        Jumping into the manual queue consumes every manual entry up to and
        including the target.
        """
        manual_index = _find(state.upcoming_manual, track_id)
        if manual_index >= 0:
            target = state.upcoming_manual[manual_index]
            new_state = state.clone(upcoming_manual=state.upcoming_manual[manual_index + 1 :])
            return Transition(new_state, target)

        order_index = _find(state.current_order, track_id)
        if order_index < 0:
            return Transition(state, None, changed=False)

        new_state = state.clone(current_index=order_index)
        current = state.current_track
        if state.is_shuffled and order_index > state.current_index and current is not None:
            new_state.played_history.append(current)
        return Transition(new_state, new_state.current_track)

    @classmethod
    def reorder_queue(
        cls, state: QueueState, track_id: TrackId | str, to_index: int
    ) -> Transition[bool]:
        """Move a queued track to a new position.

        Tracks in the automatic order can only move behind the current
        track; a target at or before it is pushed to the slot right after.
        """
        manual_index = _find(state.upcoming_manual, track_id)
        if manual_index >= 0:
            new_state = state.clone()
            moved = new_state.upcoming_manual.pop(manual_index)
            target = max(0, min(to_index, len(new_state.upcoming_manual)))
            new_state.upcoming_manual.insert(target, moved)
            return Transition(new_state, True)

        order_index = _find(state.current_order, track_id)
        if order_index < 0 or order_index == state.current_index:
            return Transition(state, False, changed=False)

        new_state = state.clone()
        moved = new_state.current_order.pop(order_index)
        current_index = state.current_index
        if order_index < current_index:
            current_index -= 1

        target = max(0, min(to_index, len(new_state.current_order)))
        if target <= current_index:
            target = current_index + 1

        new_state.current_order.insert(target, moved)
        if target <= current_index:
            current_index += 1

        new_state.current_index = current_index
        return Transition(new_state, True)

    @classmethod
    def visible_queue(cls, state: QueueState) -> list[QueueItem]:
        """Project the state into the rows a queue panel shows."""
        items: list[QueueItem] = []

        current = state.current_track
        if current is not None:
            items.append(QueueItem(track=current, status=QueueItemStatus.PLAYING, removable=False))

        items.extend(
            QueueItem(track=track, status=QueueItemStatus.MANUAL, removable=True)
            for track in state.upcoming_manual
        )
        items.extend(
            QueueItem(track=track, status=QueueItemStatus.AUTO, removable=True)
            for track in state.current_order[state.current_index + 1 :]
        )
        return items

    @classmethod
    def stats(cls, state: QueueState) -> QueueStats:
        return QueueStats(
            total=len(state.current_order),
            current=state.current_index + 1,
            manual=len(state.upcoming_manual),
            source=state.source,
        )
