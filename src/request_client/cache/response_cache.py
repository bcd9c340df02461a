# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
In-memory response cache with lazy expiry and a background sweep.

Expired entries are dropped when read, by a sweep that walks a min-heap of
expiry instants on every write and stats snapshot, and by an optional
background task running the same sweep. No per-entry timers are held.
"""

import asyncio
import contextlib
import heapq
import json
import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from ..observability.constants import (
    CACHE_ENTRIES,
    CACHE_EXPIRATIONS_TOTAL,
    CACHE_HITS_TOTAL,
    CACHE_MISSES_TOTAL,
)
from ..observability.protocols import MetricsCollectorProtocol
from ..types.response import ResponseEnvelope
from ..types.stats import CacheStats

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = 60.0


@dataclass
class CacheEntry:
    """A cached response and its lifetime on the cache's clock."""

    key: str
    response: ResponseEnvelope
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class ResponseCache:
    """
    Response cache keyed by request cache key.

    At most one entry exists per key. An entry leaves the cache exactly once:
    through ``delete``/``clear``, lazily on ``get`` after it expired, or via
    ``sweep``. Every removal path re-checks that the entry is still present,
    so racing removals are no-ops.

    Example:
        >>> cache = ResponseCache()
        >>> cache.set("GET:https://api.example.com/a:", envelope, ttl=30.0)
        >>> cache.get("GET:https://api.example.com/a:").from_cache
        True
    """

    def __init__(
        self,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        metrics_collector: MetricsCollectorProtocol | None = None,
    ) -> None:
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._metrics_collector = metrics_collector

        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        # (expires_at, key); may hold stale tuples for replaced or removed keys
        self._expiration_heap: list[tuple[float, str]] = []

        self._sweep_task: asyncio.Task[None] | None = None
        self._running = False

    # === Lifecycle ===

    async def start(self) -> None:
        """Start the background sweep task."""
        if self._running:
            return
        self._running = True
        self._sweep_task = asyncio.create_task(
            self._sweep_loop(), name=f"response_cache_sweep_{id(self)}"
        )
        logger.info(f"Response cache sweep started (interval {self.sweep_interval}s)")

    async def stop(self) -> None:
        """Stop the background sweep task and clear the cache."""
        self._running = False
        task, self._sweep_task = self._sweep_task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self.clear()
        logger.info("Response cache stopped and cleared")

    @property
    def running(self) -> bool:
        return self._running

    async def _sweep_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self.sweep_interval)
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Error during cache sweep: {e}", exc_info=True)

    # === Entry Operations ===

    def get(self, key: str) -> ResponseEnvelope | None:
        """Return a copy of the cached response tagged ``from_cache``, or None."""
        entry = self._entries.get(key)
        if entry is not None and entry.is_expired(self._clock()):
            self._expire(key)
            entry = None

        if entry is None:
            self._inc(CACHE_MISSES_TOTAL)
            return None

        self._inc(CACHE_HITS_TOTAL)
        return entry.response.as_cached()

    def set(self, key: str, response: ResponseEnvelope, ttl: float) -> None:
        """Store ``response`` under ``key`` for ``ttl`` seconds, replacing any prior entry."""
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.sweep()
        now = self._clock()
        entry = CacheEntry(
            key=key,
            response=response,
            created_at=now,
            expires_at=now + ttl,
        )
        self._entries.pop(key, None)
        self._entries[key] = entry
        heapq.heappush(self._expiration_heap, (entry.expires_at, key))
        self._update_size_gauge()

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if an entry was removed."""
        if self._entries.pop(key, None) is None:
            return False
        self._update_size_gauge()
        return True

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()
        self._expiration_heap.clear()
        self._update_size_gauge()

    def sweep(self) -> int:
        """Remove all expired entries. Returns the number removed."""
        now = self._clock()
        removed = 0
        while self._expiration_heap and self._expiration_heap[0][0] <= now:
            expires_at, key = heapq.heappop(self._expiration_heap)
            entry = self._entries.get(key)
            # Skip stale heap tuples left by replaced or deleted entries
            if entry is None or entry.expires_at != expires_at:
                continue
            if self._expire(key):
                removed += 1
        if removed:
            logger.debug(f"Swept {removed} expired cache entries")
        return removed

    def _expire(self, key: str) -> bool:
        entry = self._entries.get(key)
        if entry is None or not entry.is_expired(self._clock()):
            return False
        del self._entries[key]
        self._inc(CACHE_EXPIRATIONS_TOTAL)
        self._update_size_gauge()
        return True

    # === Introspection ===

    def keys(self) -> list[str]:
        return list(self._entries)

    def stats(self) -> CacheStats:
        """Snapshot of entry count, keys and approximate serialized size."""
        self.sweep()
        payload = [entry.response.to_dict() for entry in self._entries.values()]
        total_size = len(json.dumps(payload, default=str)) if payload else 0
        return CacheStats(
            entries=len(self._entries),
            keys=list(self._entries),
            total_size=total_size,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and not entry.is_expired(self._clock())

    # === Metrics ===

    def _inc(self, name: str) -> None:
        if self._metrics_collector is not None:
            self._metrics_collector.inc_counter(name)

    def _update_size_gauge(self) -> None:
        if self._metrics_collector is not None:
            self._metrics_collector.set_gauge(CACHE_ENTRIES, len(self._entries))


__all__ = [
    "DEFAULT_SWEEP_INTERVAL",
    "CacheEntry",
    "ResponseCache",
]
