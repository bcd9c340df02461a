# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Read-only snapshot types returned by the client's observability accessors.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class RateLimitStatus:
    """
    Snapshot of the client-side rate window.

    Attributes:
        requests_in_window: Requests recorded within the trailing window
        max_requests: Configured maximum per window
        remaining: Requests that may still start in the current window
        window_seconds: Length of the window in seconds
        reset_time: When the oldest recorded request leaves the window
            (now + window when the window is empty)
    """

    requests_in_window: int
    max_requests: int
    remaining: int
    window_seconds: float
    reset_time: datetime


@dataclass(frozen=True)
class CacheStats:
    """
    Snapshot of the response cache.

    Attributes:
        entries: Number of stored entries
        keys: Cache keys in insertion order
        total_size: Length of the JSON serialization of all cached responses
    """

    entries: int
    keys: list[str] = field(default_factory=list)
    total_size: int = 0


__all__ = [
    "CacheStats",
    "RateLimitStatus",
]
