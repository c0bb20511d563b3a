"""Core domain entities for the queue bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from media_queue.domain.music.value_objects import (
    PreviousAction,
    QueueItemStatus,
    RepeatMode,
    SourceType,
    TrackId,
    TrackIdField,
)
from media_queue.domain.shared.messages import ErrorMessages
from media_queue.domain.shared.types import (
    DurationSeconds,
    NonEmptyStr,
    NonNegativeInt,
    PositionSeconds,
    QueueIndexInt,
    TrackTitleStr,
)


class Track(BaseModel):
    """Immutable value object representing a playable track."""

    model_config = ConfigDict(frozen=True)

    id: TrackIdField
    title: TrackTitleStr
    artist: str = ""
    artist_ids: tuple[str, ...] = ()
    album: str = ""
    duration_seconds: DurationSeconds | None = None
    album_art: str | None = None

    @property
    def duration_formatted(self) -> str:
        """Format duration as MM:SS or HH:MM:SS."""
        if self.duration_seconds is None:
            return "Unknown"

        hours, remainder = divmod(int(self.duration_seconds), 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @property
    def display_title(self) -> str:
        """Get display title with artist if available."""
        if self.artist:
            return f"{self.title} - {self.artist}"
        return self.title

    def has_id(self, track_id: TrackId | str) -> bool:
        return self.id.matches(track_id)


class QueueSource(BaseModel):
    """Where the tracks in the queue came from."""

    model_config = ConfigDict(frozen=True)

    type: SourceType = SourceType.NONE
    id: NonEmptyStr | None = None
    name: NonEmptyStr | None = None

    @property
    def display_name(self) -> str | None:
        """Text for a "Playing from ..." label, or None for an unnamed source."""
        if self.type == SourceType.NONE:
            return None
        label = self.name or self.id
        if label is None:
            return self.type.value.capitalize()
        return f"{self.type.value.capitalize()}: {label}"


class QueueState(BaseModel):
    """Full in-memory and persisted state of the play queue.

    ``current_order`` is the active play order, ``original_order`` the
    unshuffled order received when the queue was created. ``played_history``
    is a stack of tracks passed over while shuffled and ``upcoming_manual``
    a FIFO of user-inserted tracks that play before the automatic order
    advances.
    """

    source: QueueSource = Field(default_factory=QueueSource)
    original_order: list[Track] = Field(default_factory=list)
    current_order: list[Track] = Field(default_factory=list)
    current_index: QueueIndexInt = 0
    played_history: list[Track] = Field(default_factory=list)
    upcoming_manual: list[Track] = Field(default_factory=list)
    is_shuffled: bool = False
    repeat_mode: RepeatMode = RepeatMode.NONE

    @model_validator(mode="after")
    def _check_index_bounds(self) -> QueueState:
        if self.current_order and self.current_index >= len(self.current_order):
            raise ValueError(
                ErrorMessages.INDEX_OUT_OF_RANGE.format(
                    index=self.current_index, length=len(self.current_order)
                )
            )
        return self

    @property
    def current_track(self) -> Track | None:
        if not self.current_order:
            return None
        if 0 <= self.current_index < len(self.current_order):
            return self.current_order[self.current_index]
        return None

    @property
    def is_empty(self) -> bool:
        return not self.current_order and not self.upcoming_manual

    @property
    def is_at_end(self) -> bool:
        return self.current_index >= len(self.current_order) - 1

    def clone(self, **update: object) -> QueueState:
        """Return a copy with fresh sequence containers and optional field overrides.

        Tracks are frozen so the copies can share them safely.
        """
        data: dict[str, object] = {
            "original_order": list(self.original_order),
            "current_order": list(self.current_order),
            "played_history": list(self.played_history),
            "upcoming_manual": list(self.upcoming_manual),
        }
        data.update(update)
        return self.model_copy(update=data)


def create_empty_state() -> QueueState:
    """Default state: no source, no tracks, shuffle off, repeat none."""
    return QueueState()


class QueueItem(BaseModel):
    """One row of the visible queue."""

    model_config = ConfigDict(frozen=True)

    track: Track
    status: QueueItemStatus
    removable: bool


class QueueStats(BaseModel):
    """Summary counters for a queue header."""

    model_config = ConfigDict(frozen=True)

    total: NonNegativeInt
    current: NonNegativeInt
    manual: NonNegativeInt
    source: QueueSource


class PreviousSelection(BaseModel):
    """Outcome of pressing the previous button."""

    model_config = ConfigDict(frozen=True)

    action: PreviousAction
    track: Track | None = None

    @property
    def is_restart(self) -> bool:
        return self.action == PreviousAction.RESTART


class LastPlayed(BaseModel):
    """The track to offer on startup and where in it playback stopped."""

    model_config = ConfigDict(frozen=True)

    track: Track
    position_seconds: PositionSeconds = 0.0
