"""Immutable value objects for the queue bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from pydantic import PlainSerializer, PlainValidator

from media_queue.domain.shared.messages import ErrorMessages


@dataclass(frozen=True)
class TrackId:
    """Stable identifier assigned to a track by the library service."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(ErrorMessages.EMPTY_TRACK_ID)

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)

    def matches(self, other: TrackId | str) -> bool:
        """Compare against another id or its raw string form."""
        return self.value == str(other)


def _to_track_id(value: object) -> TrackId:
    if isinstance(value, TrackId):
        return value
    if isinstance(value, str):
        return TrackId(value)
    raise ValueError(ErrorMessages.INVALID_TRACK_ID_TYPE.format(type=type(value).__name__))


# Serializes as plain string in JSON, stores as TrackId in the model.
TrackIdField = Annotated[
    TrackId,
    PlainValidator(_to_track_id),
    PlainSerializer(lambda v: v.value, return_type=str),
]


class SourceType(Enum):
    """Why a set of tracks was queued."""

    PLAYLIST = "playlist"
    ALBUM = "album"
    ARTIST = "artist"
    MANUAL = "manual"
    NONE = "none"


class RepeatMode(Enum):
    """Repeat settings for queue playback."""

    NONE = "none"  # Stop at the end of the queue
    ONE = "one"  # Loop the current track
    ALL = "all"  # Loop the whole queue, reshuffling when shuffled

    def next_mode(self) -> RepeatMode:
        """Cycle to next repeat mode (none -> one -> all -> none)."""
        modes = list(RepeatMode)
        current_index = modes.index(self)
        next_index = (current_index + 1) % len(modes)
        return modes[next_index]


class InsertPosition(Enum):
    """Where a manually added track goes in the manual queue."""

    NEXT = "next"
    END = "end"


class QueueItemStatus(Enum):
    """How a visible queue entry got there."""

    PLAYING = "playing"
    MANUAL = "manual"
    AUTO = "auto"


class PreviousAction(Enum):
    """What the previous button resolved to."""

    RESTART = "restart"
    PREVIOUS = "previous"
