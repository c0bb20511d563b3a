"""Recently played list rules."""

from __future__ import annotations

from collections.abc import Sequence

from media_queue.domain.music.entities import Track


def push_recently_played(recent: Sequence[Track], track: Track, limit: int) -> list[Track]:
    """Return ``recent`` with ``track`` moved to the front.

    Earlier entries with the same id are dropped and the result is cut to
    ``limit`` tracks. The input is never mutated.
    """
    remaining = [item for item in recent if not item.has_id(track.id)]
    return [track, *remaining][:limit]
