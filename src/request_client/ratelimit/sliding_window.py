# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client-side sliding window rate limiter.

Request start times are kept in a deque and pruned lazily on each check.
A request that would exceed the window is rejected immediately rather
than delayed.
"""

import logging
import math
import time
from collections import deque
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from ..config import RateLimitConfig
from ..exceptions import RateLimitExceededError
from ..types.stats import RateLimitStatus

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """
    Bounds the number of requests started within a trailing window.

    The timestamp deque never grows beyond ``max_requests``: a request is only
    recorded after the check has passed.

    Example:
        >>> limiter = SlidingWindowRateLimiter(RateLimitConfig(max_requests=2))
        >>> limiter.acquire()
        >>> limiter.acquire()
        >>> limiter.acquire()
        Traceback (most recent call last):
        ...
        RateLimitExceededError: Rate limit exceeded. Please wait 60 seconds.
    """

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or RateLimitConfig()
        self._clock = clock
        self._timestamps: deque[float] = deque()

    def _prune(self, now: float) -> None:
        window_start = now - self.config.window_seconds
        while self._timestamps and self._timestamps[0] <= window_start:
            self._timestamps.popleft()

    def acquire(self) -> None:
        """
        Record a request start, or reject it.

        Raises:
            RateLimitExceededError: If the window is full. ``retry_after`` is
                the remaining window of the oldest request, rounded up to
                whole seconds.
        """
        now = self._clock()
        self._prune(now)

        if len(self._timestamps) >= self.config.max_requests:
            wait_time = self.config.window_seconds - (now - self._timestamps[0])
            retry_after = max(1, math.ceil(wait_time))
            logger.debug(
                f"Rate limit exceeded ({len(self._timestamps)}/"
                f"{self.config.max_requests}), retry after {retry_after}s"
            )
            raise RateLimitExceededError(retry_after=retry_after)

        self._timestamps.append(now)

    def status(self) -> RateLimitStatus:
        """Snapshot of the current window. Does not modify stored timestamps."""
        now = self._clock()
        window_start = now - self.config.window_seconds
        recent = [t for t in self._timestamps if t > window_start]

        oldest = recent[0] if recent else now
        reset_in = oldest + self.config.window_seconds - now

        return RateLimitStatus(
            requests_in_window=len(recent),
            max_requests=self.config.max_requests,
            remaining=max(0, self.config.max_requests - len(recent)),
            window_seconds=self.config.window_seconds,
            reset_time=datetime.now(timezone.utc) + timedelta(seconds=reset_in),
        )

    def reset(self) -> None:
        self._timestamps.clear()

    def __len__(self) -> int:
        return len(self._timestamps)


__all__ = ["SlidingWindowRateLimiter"]
