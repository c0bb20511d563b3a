"""Infrastructure layer - durable storage of the queue state.

This layer contains implementations for:
- Persistence (SQLite and in-memory key-value stores)
- Versioned queue state serialization
- Recently played list and resume point
"""

from media_queue.infrastructure.persistence.database import Database
from media_queue.infrastructure.persistence.history_persistence import PlaybackHistoryPersistence
from media_queue.infrastructure.persistence.queue_persistence import QueueStatePersistence

__all__ = [
    "Database",
    "PlaybackHistoryPersistence",
    "QueueStatePersistence",
]
