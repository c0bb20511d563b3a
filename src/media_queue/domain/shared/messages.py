"""Centralized message constants for error messages, validation, and log output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Validation Errors
    EMPTY_TRACK_ID = "Track ID cannot be empty"
    INVALID_TRACK_ID_TYPE = "Track ID must be a string, got {type}"

    # Queue Validation Errors
    INDEX_OUT_OF_RANGE = "current_index {index} is out of range for {length} tracks"

    # Persisted State Errors
    STATE_VERSION_MISMATCH = "Persisted queue version {found!r} does not match {expected!r}"
    STATE_NOT_AN_OBJECT = "Persisted queue state is not a JSON object"
    STATE_MISSING_FIELDS = "Persisted queue state is missing fields: {fields}"
    STATE_ORDER_NOT_A_LIST = "Persisted queue state current_order is not a list"
    RECENT_NOT_A_LIST = "Persisted recently played list is not a JSON array"

    # Settings Validation Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"


class LogTemplates:
    """Log message templates.

    Use these with logger.info(), logger.error(), etc. and pass values as
    parameters so formatting is deferred to the logging framework.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Queue Operations
    QUEUE_CREATED = "Created queue from %s %r with %d tracks (shuffle=%s, start=%d)"
    QUEUE_ADVANCED = "Advanced to '%s' (%s)"
    QUEUE_EXHAUSTED = "Reached end of queue"
    QUEUE_PREVIOUS = "Previous selection: %s -> %s"
    QUEUE_SHUFFLE_TOGGLED = "Shuffle %s"
    QUEUE_REPEAT_CHANGED = "Repeat mode set to %s"
    QUEUE_ENQUEUED = "Added '%s' to manual queue (%s)"
    QUEUE_REMOVED = "Removed track %s from queue"
    QUEUE_REMOVE_CURRENT = "Cannot remove currently playing track %s"
    QUEUE_REMOVE_MISSING = "Track %s not found in queue"
    QUEUE_JUMPED = "Jumped to '%s'"
    QUEUE_JUMP_MISSING = "Track %s not found in queue, cannot jump"
    QUEUE_REORDERED = "Reordered track %s to position %d"
    QUEUE_REORDER_REJECTED = "Cannot reorder track %s: not found or is currently playing"
    QUEUE_CLEARED = "Cleared queue"

    # Persistence
    STATE_SAVED = "Saved queue state (%d tracks, index %d)"
    STATE_SAVE_FAILED = "Failed to save queue state: %r"
    STATE_RESTORED = "Restored queue state (%d tracks, shuffle=%s, repeat=%s)"
    STATE_NOT_FOUND = "No saved queue state found"
    STATE_DISCARDED = "Discarding saved queue state: %s"
    STATE_LOAD_FAILED = "Failed to load queue state: %r"
    STATE_CLEARED = "Cleared saved queue state"
    STATE_CLEAR_FAILED = "Failed to clear saved queue state: %r"

    # Playback History
    HISTORY_SAVE_FAILED = "Failed to save playback history (%s): %r"
    HISTORY_LOAD_FAILED = "Failed to load playback history: %r"
    HISTORY_RECENT_RESET = "Recently played list version %r does not match %r, starting fresh"
    HISTORY_DISCARDED = "Discarding saved %s: %s"
    HISTORY_RESTORED = "Restored playback history (%d recent tracks, resume point: %s)"
    HISTORY_CLEARED = "Cleared playback history"
    HISTORY_CLEAR_FAILED = "Failed to clear playback history: %r"

    # Playback Controller
    PLAYBACK_STARTED = "Playing '%s'"
    PLAYBACK_RESTARTED = "Restarting current track"
    PLAYBACK_STOPPED = "End of queue reached, stopping playback"
    PLAYBACK_NO_PREVIOUS = "No previous track available, restarting current track"
    PLAYBACK_FALLBACK = "Track %s not in queue, playing outside queue context"
    PLAYBACK_RESUMING = "Resuming '%s' at %.1fs"
    PLAYBACK_NOTHING_TO_RESUME = "No last played track to resume"
    PLAYBACK_ERROR = "Audio player failed during %s: %r"
    LIBRARY_ERROR = "Library service failed to load %s: %r"

    # Application Lifecycle
    APP_STARTING = "Starting media-queue ({environment})"
