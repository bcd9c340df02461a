"""Tests for the client-side sliding window rate limiter."""

from datetime import datetime, timedelta, timezone

import pytest

from request_client.config import RateLimitConfig
from request_client.exceptions import RateLimitExceededError
from request_client.ratelimit import SlidingWindowRateLimiter


@pytest.fixture
def limiter(clock):
    """Create a limiter allowing 3 requests per 10 seconds."""
    return SlidingWindowRateLimiter(
        RateLimitConfig(max_requests=3, window_seconds=10.0), clock=clock
    )


class TestAcquire:
    """Tests for acquire()."""

    def test_allows_up_to_max_requests(self, limiter):
        """max_requests acquisitions succeed within one window."""
        for _ in range(3):
            limiter.acquire()
        assert len(limiter) == 3

    def test_rejects_when_full(self, limiter, clock):
        """The next acquisition fails with a positive retry_after."""
        for _ in range(3):
            limiter.acquire()
            clock.advance(1.0)

        with pytest.raises(RateLimitExceededError) as exc_info:
            limiter.acquire()

        # Oldest request was 3s ago in a 10s window
        assert exc_info.value.retry_after == 7
        assert len(limiter) == 3

    def test_retry_after_rounds_up(self, limiter, clock):
        """Fractional waits are rounded up to whole seconds."""
        for _ in range(3):
            limiter.acquire()
        clock.advance(8.5)

        with pytest.raises(RateLimitExceededError) as exc_info:
            limiter.acquire()
        assert exc_info.value.retry_after == 2

    def test_allows_after_window_passes(self, limiter, clock):
        """Once the oldest request leaves the window a new one is allowed."""
        for _ in range(3):
            limiter.acquire()

        clock.advance(10.0)
        limiter.acquire()
        assert len(limiter) == 1

    def test_reset(self, limiter):
        """reset forgets recorded requests."""
        for _ in range(3):
            limiter.acquire()
        limiter.reset()
        limiter.acquire()


class TestStatus:
    """Tests for status()."""

    def test_empty_window(self, limiter):
        """An empty window reports full capacity."""
        before = datetime.now(timezone.utc)
        status = limiter.status()
        assert status.requests_in_window == 0
        assert status.remaining == 3
        assert status.max_requests == 3
        assert status.window_seconds == 10.0
        assert status.reset_time >= before + timedelta(seconds=10.0)

    def test_counts_recent_requests(self, limiter, clock):
        """Requests within the window are counted."""
        limiter.acquire()
        clock.advance(4.0)
        limiter.acquire()

        status = limiter.status()
        assert status.requests_in_window == 2
        assert status.remaining == 1

        clock.advance(6.0)
        status = limiter.status()
        assert status.requests_in_window == 1
        assert status.remaining == 2

    def test_status_does_not_prune(self, limiter, clock):
        """status() is read-only."""
        limiter.acquire()
        clock.advance(20.0)
        assert limiter.status().requests_in_window == 0
        assert len(limiter) == 1
