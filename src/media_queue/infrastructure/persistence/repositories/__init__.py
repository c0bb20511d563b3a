"""Key-value store implementations."""

from media_queue.infrastructure.persistence.repositories.kv_repository import SQLiteKeyValueStore
from media_queue.infrastructure.persistence.repositories.memory_repository import (
    InMemoryKeyValueStore,
)

__all__ = [
    "SQLiteKeyValueStore",
    "InMemoryKeyValueStore",
]
