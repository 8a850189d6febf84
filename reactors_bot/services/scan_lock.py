"""
Per-target scan locking.

Scheduled, admin and slash-triggered scans can overlap. Each target channel
gets one asyncio lock; a second scan for a held target fails fast with
ScanInProgressError rather than queueing behind the first.
"""

import asyncio
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncGenerator, DefaultDict

from reactors_bot.utils.leaderboard_exceptions import ScanInProgressError

logger = logging.getLogger(__name__)


class ScanLockRegistry:
    """Hands out one lock per target channel id."""

    def __init__(self):
        self._locks: DefaultDict[int, asyncio.Lock] = defaultdict(asyncio.Lock)

    def is_locked(self, target_id: int) -> bool:
        return target_id in self._locks and self._locks[target_id].locked()

    @asynccontextmanager
    async def acquire(self, target_id: int) -> AsyncGenerator[None, None]:
        """Hold the target's lock for the duration of the block."""
        lock = self._locks[target_id]
        # Check and acquire happen without an await in between
        if lock.locked():
            logger.warning(f"Scan already running for target {target_id}, refusing overlap")
            raise ScanInProgressError(target_id)

        await lock.acquire()
        try:
            yield
        finally:
            lock.release()
