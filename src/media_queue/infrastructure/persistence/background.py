"""Fire-and-forget writes shared by the persistence adapters."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable


class BackgroundWriter:
    """Runs store writes as untracked asyncio tasks, serialized per adapter.

    With a running event loop a write is scheduled as a task and the caller
    returns immediately. Without one (scripts, synchronous callers) the write
    completes inline through ``asyncio.run``, so such callers do block on the
    store until it finishes.
    """

    def __init__(self) -> None:
        self._pending: set[asyncio.Task[None]] = set()
        self._write_lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    async def flush(self) -> None:
        """Wait until every scheduled write has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _run_in_background(self, factory: Callable[[], Awaitable[None]]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(_await(factory))
            return

        task = loop.create_task(_await(factory))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _lock(self) -> asyncio.Lock:
        # asyncio.Lock binds to the loop it is first used on.
        loop = asyncio.get_running_loop()
        if self._write_lock is None or self._lock_loop is not loop:
            self._write_lock = asyncio.Lock()
            self._lock_loop = loop
        return self._write_lock


async def _await(factory: Callable[[], Awaitable[None]]) -> None:
    await factory()
