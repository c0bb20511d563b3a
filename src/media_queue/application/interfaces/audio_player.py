"""Port interface for the audio playback service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.music.entities import Track


class AudioPlayer(ABC):
    """Interface for the component that actually decodes and streams audio."""

    @abstractmethod
    async def play(self, track: Track) -> bool:
        """Start streaming a track from the beginning."""
        ...

    @abstractmethod
    async def seek(self, seconds: float) -> bool:
        """Seek within the current track."""
        ...

    @abstractmethod
    async def stop(self) -> bool:
        """Stop playback."""
        ...
