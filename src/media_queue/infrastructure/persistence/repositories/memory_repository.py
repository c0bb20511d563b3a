"""In-memory implementation of the key-value store."""

from __future__ import annotations

from media_queue.domain.music.repository import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store; contents are lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)
