"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and the external collaborators it drives.
"""

from media_queue.application.interfaces.audio_player import AudioPlayer
from media_queue.application.interfaces.library_service import LibraryService

__all__ = [
    "AudioPlayer",
    "LibraryService",
]
