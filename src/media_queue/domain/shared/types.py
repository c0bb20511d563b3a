"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the package is defined here once,
so models can simply annotate their fields::

    from media_queue.domain.shared.types import NonEmptyStr, NonNegativeInt

    class MyModel(BaseModel):
        name: NonEmptyStr
        count: NonNegativeInt
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

TrackTitleStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Track title: 1-500 characters."""


# ── Domain-specific numeric constraints ─────────────────────────────

DurationSeconds = Annotated[float, Field(ge=0.0, le=86_400.0)]
"""Track duration in seconds: 0 … 86 400 (24 hours)."""

QueueIndexInt = Annotated[int, Field(ge=0)]
"""Zero-based position in the play order."""

PositionSeconds = Annotated[float, Field(ge=0.0)]
"""Playback position within a track, in seconds."""


# ── Settings-specific constraints ──────────────────────────────────

BusyTimeoutMs = Annotated[int, Field(ge=1000, le=30000)]
"""Database busy timeout in milliseconds: 1 000 … 30 000."""

ConnectionTimeoutS = Annotated[int, Field(ge=1, le=60)]
"""Database connection timeout in seconds: 1 … 60."""

RestartThresholdSeconds = Annotated[int, Field(ge=0, le=600)]
"""Elapsed seconds after which "previous" restarts the current track."""

DoubleClickWindowMs = Annotated[int, Field(ge=0, le=10_000)]
"""Milliseconds within which a second "previous" press always goes back."""

RecentLimitInt = Annotated[int, Field(ge=1, le=200)]
"""Number of tracks kept in the recently played list."""

ResumePositionSeconds = Annotated[float, Field(ge=0.0, le=600.0)]
"""Progress in seconds a track needs before it becomes the resume point."""
