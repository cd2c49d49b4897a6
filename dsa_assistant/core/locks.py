"""
Keyed asyncio locks.

Hands out one asyncio.Lock per key so work on the same key is serialized
while different keys proceed in parallel.

Dependencies: asyncio
System role: Per-document mutual exclusion for embedding replacement
"""

import asyncio
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager


class KeyedLockRegistry:
    """Registry of lazily created asyncio locks keyed by an arbitrary id."""

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}

    def get(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """Acquire the lock for key for the duration of the block."""
        async with self.get(key):
            yield

    def __len__(self) -> int:
        return len(self._locks)
