"""
Per-key asyncio locks.

Tasks holding different keys run in parallel; tasks on the same key
run one at a time. Entries are dropped once nobody holds or awaits them.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class LockTimeoutError(Exception):
    """Waiting for a key's lock exceeded the configured timeout."""

    def __init__(self, key: str, timeout: float | None):
        super().__init__(f"Timed out after {timeout}s waiting for lock on {key}")
        self.key = key
        self.timeout = timeout


class KeyedLock:
    """Registry of one asyncio.Lock per key."""

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """
        Hold the lock for ``key`` for the duration of the block.

        Raises LockTimeoutError if it cannot be acquired within ``timeout``.
        """
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            try:
                # Acquire in this task; a timeout never leaves the lock held
                async with asyncio.timeout(self.timeout):
                    await lock.acquire()
            except TimeoutError:
                raise LockTimeoutError(key, self.timeout) from None
            try:
                yield
            finally:
                lock.release()
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]
