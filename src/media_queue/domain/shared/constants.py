"""Centralized constants for storage keys, database schema, and queue policy defaults.

This module provides reusable constants that reduce magic strings and improve maintainability.
"""

from __future__ import annotations


class QueueConstants:
    """Defaults for queue sequencing policy and persisted state."""

    # Previous button: restart when more than this many seconds have elapsed
    RESTART_THRESHOLD_SECONDS = 10
    # Two presses closer than this always go back
    DOUBLE_CLICK_WINDOW_MS = 1000

    SCHEMA_VERSION = "1.0"
    STATE_KEY = "queue.state"
    VERSION_KEY = "queue.version"

    REQUIRED_STATE_FIELDS = (
        "source",
        "original_order",
        "current_order",
        "current_index",
        "played_history",
        "upcoming_manual",
        "is_shuffled",
        "repeat_mode",
    )


class HistoryConstants:
    """Defaults for the recently played list and the resume point."""

    RECENT_LIMIT = 20
    # Progress must pass this before a track is remembered as the resume point
    RESUME_MIN_POSITION_SECONDS = 5

    SCHEMA_VERSION = "1.1"
    RECENT_KEY = "playback.recent"
    RECENT_VERSION_KEY = "playback.recent_version"
    LAST_PLAYED_KEY = "playback.last_played"


class SQLPragmas:
    """SQLite PRAGMA statements for database configuration.

    These pragmas are applied to each connection to ensure consistent behavior.
    """

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"


class DatabaseURLSchemes:
    """Valid database URL schemes for validation."""

    SQLITE = "sqlite://"
    SQLITE_FILE_PREFIX = "sqlite:///"

    # For in-memory testing
    MEMORY = ":memory:"
    MEMORY_SHARED_URI = "file:media-queue-{name}?mode=memory&cache=shared"


class LogLevels:
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    ALL = frozenset({DEBUG, INFO, WARNING, ERROR, CRITICAL})
