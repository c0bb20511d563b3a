"""
Queue Domain Repository Interfaces

Abstract base classes defining the contracts for data persistence.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract durable key-value store holding serialized queue state.

    Implementations may use in-memory storage, SQLite, a settings file, etc.
    Values are opaque strings; callers own their encoding.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key: The storage key.

        Returns:
            The stored value, or None if the key is absent.
        """
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous value for the key.

        Args:
            key: The storage key.
            value: The value to store.
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key.

        Args:
            key: The storage key.

        Returns:
            True if the key was deleted, False if it didn't exist.
        """
        ...
