"""In-process response cache with per-entry expiry and passive eviction."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from music_discovery.domain.shared.constants import CacheDefaults
from music_discovery.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    payload: T
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


def make_cache_key(operation: str, params: Mapping[str, Any]) -> str:
    """Build ``operation:[[name, value], ...]`` with params sorted, trimmed and lowercased."""
    pairs = []
    for name in sorted(params):
        value = params[name]
        if isinstance(value, str):
            value = value.strip().lower()
        pairs.append([name, value])
    encoded = json.dumps(pairs, ensure_ascii=False, separators=(",", ":"))
    return f"{operation}:{encoded}"


class ResponseCache:
    """Process-wide cache of parsed remote responses.

    Created once and injected into the client; lives as long as the process.
    Each key maps to a whole value that is inserted or overwritten
    atomically, so concurrent readers see either the old or new entry.

    There is no background timer. Expired entries are dropped when read, when
    overwritten, or by a sweep that runs on write once the entry count exceeds
    ``high_water_mark``; the sweep removes only entries that have expired.
    """

    def __init__(
        self,
        ttl_seconds: float = CacheDefaults.TTL_MINUTES * 60.0,
        high_water_mark: int = CacheDefaults.HIGH_WATER_MARK,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._high_water_mark = high_water_mark
        self._clock = clock
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._hits = 0
        self._misses = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def __len__(self) -> int:
        return len(self._entries)

    def get_entry(self, key: str) -> CacheEntry[Any] | None:
        """Return the live entry for ``key`` or None on miss/expiry."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            self._misses += 1
            return None
        self._hits += 1
        return entry

    def set(self, key: str, payload: Any, ttl_seconds: float | None = None) -> None:
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        self._entries[key] = CacheEntry(payload=payload, expires_at=self._clock() + ttl)
        if len(self._entries) > self._high_water_mark:
            self.sweep()

    def sweep(self) -> int:
        """Remove expired entries; returns how many were dropped."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            self._entries.pop(key, None)
        if expired:
            logger.debug(LogTemplates.CACHE_SWEPT, len(expired), len(self._entries))
        return len(expired)

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        logger.info(LogTemplates.CACHE_CLEARED, count)
        return count

    def get_stats(self) -> dict[str, int]:
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": int((self._hits / max(1, self._hits + self._misses)) * 100),
        }
