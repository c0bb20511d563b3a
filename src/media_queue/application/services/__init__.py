"""Application services: the queue state holder, playback history and the playback controller."""

from media_queue.application.services.history_service import PlaybackHistory
from media_queue.application.services.playback_service import PlaybackController
from media_queue.application.services.queue_service import QueueManager

__all__ = [
    "QueueManager",
    "PlaybackHistory",
    "PlaybackController",
]
