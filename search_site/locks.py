"""Reader/writer lock for asyncio code.

Readers share the lock; a writer holds it alone. Writers take precedence:
once a writer is waiting, new readers queue behind it so a template reload
is never starved by a steady stream of page renders.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ReadWriteLock:
    """Writer-preferring reader/writer lock built on asyncio.Condition."""

    def __init__(self):
        self._condition = asyncio.Condition()
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0
        self._wakeups: set[asyncio.Task] = set()

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        return self._readers

    @property
    def writer_active(self) -> bool:
        """Whether a writer currently holds the lock."""
        return self._writer_active

    async def _notify_waiters(self) -> None:
        async with self._condition:
            self._condition.notify_all()

    async def _wake_waiters(self) -> None:
        """Wake every waiter; completes even if the releasing task is cancelled."""
        wakeup = asyncio.ensure_future(self._notify_waiters())
        self._wakeups.add(wakeup)
        wakeup.add_done_callback(self._wakeups.discard)
        await asyncio.shield(wakeup)

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        async with self._condition:
            await self._condition.wait_for(lambda: not self._writer_active and self._writers_waiting == 0)
            self._readers += 1
        try:
            yield
        finally:
            # State changes before any await so cancellation cannot skip them
            self._readers -= 1
            if self._readers == 0:
                await self._wake_waiters()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        """Hold the lock exclusively for the duration of the block."""
        async with self._condition:
            self._writers_waiting += 1
            try:
                await self._condition.wait_for(lambda: not self._writer_active and self._readers == 0)
            finally:
                self._writers_waiting -= 1
                # Readers parked behind a cancelled writer must re-check
                self._condition.notify_all()
            self._writer_active = True
        try:
            yield
        finally:
            self._writer_active = False
            await self._wake_waiters()
