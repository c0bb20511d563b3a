"""Port interface for the remote media library."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.music.entities import QueueSource, Track


class LibraryService(ABC):
    """Interface for fetching track metadata from the media library."""

    @abstractmethod
    async def get_tracks(self, source: QueueSource) -> list[Track]:
        """Return the tracks of a source (album, artist, playlist) in library order."""
        ...

    @abstractmethod
    async def get_track(self, track_id: str) -> Track | None:
        """Look up a single track by id, or None if the library does not know it."""
        ...
