import random

import pytest
import pytest_asyncio

# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from media_queue.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def kv_store(in_memory_database):
    """Create a SQLite key-value store with in-memory database."""
    from media_queue.infrastructure.persistence.repositories.kv_repository import (
        SQLiteKeyValueStore,
    )

    return SQLiteKeyValueStore(in_memory_database)


@pytest.fixture
def memory_store():
    """Create a process-local key-value store."""
    from media_queue.infrastructure.persistence.repositories.memory_repository import (
        InMemoryKeyValueStore,
    )

    return InMemoryKeyValueStore()


@pytest.fixture
def persistence(memory_store):
    """Create a queue state persistence adapter over the in-memory store."""
    from media_queue.infrastructure.persistence.queue_persistence import QueueStatePersistence

    return QueueStatePersistence(memory_store)


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


def make_track(track_id: str, title: str | None = None, **kwargs):
    from media_queue.domain.music.entities import Track
    from media_queue.domain.music.value_objects import TrackId

    return Track(id=TrackId(track_id), title=title or track_id.upper(), **kwargs)


@pytest.fixture
def track_a():
    return make_track("a", "Alpha", artist="Artist One", duration_seconds=180)


@pytest.fixture
def track_b():
    return make_track("b", "Bravo", artist="Artist Two", duration_seconds=200)


@pytest.fixture
def track_c():
    return make_track("c", "Charlie", artist="Artist One", duration_seconds=240)


@pytest.fixture
def track_x():
    return make_track("x", "X-Ray", artist="Guest", duration_seconds=150)


@pytest.fixture
def abc_tracks(track_a, track_b, track_c):
    """Three-track list used by most sequencing tests."""
    return [track_a, track_b, track_c]


@pytest.fixture
def album_source():
    """Create a sample album source."""
    from media_queue.domain.music.entities import QueueSource
    from media_queue.domain.music.value_objects import SourceType

    return QueueSource(type=SourceType.ALBUM, id="X", name="Album X")


@pytest.fixture
def rng():
    """Seeded random source for reproducible shuffles."""
    return random.Random(1234)


# ============================================================================
# Clock Fixtures
# ============================================================================


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(clock, rng):
    """Queue manager without persistence."""
    from media_queue.application.services.queue_service import QueueManager

    return QueueManager(clock=clock, rng=rng)
