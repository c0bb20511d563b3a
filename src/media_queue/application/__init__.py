"""
Application Layer

Orchestrates domain transitions and the collaborators a playback host provides.

Structure:
- services/: QueueManager (state holder) and PlaybackController
- interfaces/: Port interfaces for the audio player and the media library
"""
