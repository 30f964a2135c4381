"""Token bucket throttling outbound metadata requests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from music_discovery.domain.shared.constants import RateLimitDefaults
from music_discovery.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class TokenBucket:
    """Bounded bucket of request tokens with delayed refill.

    A caller takes one token per outbound request. When the request finishes
    the token is not returned immediately: it is added back to the bucket
    ``refill_interval`` seconds later. At most ``capacity`` requests are in
    flight at once, and a saturated caller sees a steady ceiling of roughly
    ``capacity / (latency + refill_interval)`` requests per second no matter
    how large the burst. Waiters are not capped and never shed.

    Waiting for a token honours task cancellation. Tokens are returned on the
    running event loop, so an instance must be used from a single loop.
    """

    def __init__(
        self,
        capacity: int = RateLimitDefaults.CAPACITY,
        refill_interval: float = RateLimitDefaults.REFILL_MS / 1000.0,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if refill_interval < 0:
            raise ValueError("refill_interval must be non-negative")

        self._capacity = capacity
        self._refill_interval = refill_interval
        self._semaphore = asyncio.Semaphore(capacity)
        self._pending_refills: set[asyncio.TimerHandle] = set()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def refill_interval(self) -> float:
        return self._refill_interval

    @property
    def available(self) -> int:
        """Tokens that can be taken right now without waiting."""
        return self._semaphore._value  # noqa: SLF001

    async def acquire(self) -> None:
        if self._semaphore.locked():
            logger.debug(LogTemplates.RATE_LIMIT_WAITING)
        await self._semaphore.acquire()

    def release(self) -> None:
        """Schedule the token to return after the refill interval."""
        if self._refill_interval <= 0:
            self._semaphore.release()
            return

        loop = asyncio.get_running_loop()
        handle: asyncio.TimerHandle

        def _refill() -> None:
            self._pending_refills.discard(handle)
            self._semaphore.release()

        handle = loop.call_later(self._refill_interval, _refill)
        self._pending_refills.add(handle)

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold one token for the duration of the block."""
        await self.acquire()
        try:
            yield
        finally:
            self.release()

    def reset(self) -> None:
        """Return every outstanding token immediately (used on shutdown)."""
        for handle in list(self._pending_refills):
            handle.cancel()
            self._semaphore.release()
        self._pending_refills.clear()
