"""
Queue Bounded Context

Domain logic for track sequencing, shuffle, repeat and the manual queue.
"""

from media_queue.domain.music.entities import (
    LastPlayed,
    PreviousSelection,
    QueueItem,
    QueueSource,
    QueueState,
    QueueStats,
    Track,
    create_empty_state,
)
from media_queue.domain.music.history import push_recently_played
from media_queue.domain.music.repository import KeyValueStore
from media_queue.domain.music.services import QueueDomainService, Transition
from media_queue.domain.music.shuffle import shuffle_tracks
from media_queue.domain.music.value_objects import (
    InsertPosition,
    PreviousAction,
    QueueItemStatus,
    RepeatMode,
    SourceType,
    TrackId,
)

__all__ = [
    # Entities
    "Track",
    "QueueSource",
    "QueueState",
    "QueueItem",
    "QueueStats",
    "PreviousSelection",
    "LastPlayed",
    "create_empty_state",
    # Value Objects
    "TrackId",
    "SourceType",
    "RepeatMode",
    "InsertPosition",
    "QueueItemStatus",
    "PreviousAction",
    # Repository
    "KeyValueStore",
    # Services
    "QueueDomainService",
    "Transition",
    "shuffle_tracks",
    "push_recently_played",
]
