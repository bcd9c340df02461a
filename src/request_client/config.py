# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for the Request Client

This module provides configuration classes for the request client,
including timeout, retry, caching and rate limiting settings.
"""

from dataclasses import dataclass, field

DEFAULT_CONTENT_TYPE = "application/json"


def _default_headers() -> dict[str, str]:
    return {"Content-Type": DEFAULT_CONTENT_TYPE}


@dataclass
class RateLimitConfig:
    """
    Client-side sliding window rate limit.

    At most ``max_requests`` requests are allowed to start within any
    trailing ``window_seconds`` interval.
    """

    max_requests: int = 100
    """Maximum requests within the window."""

    window_seconds: float = 60.0
    """Length of the trailing window in seconds."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")


@dataclass
class ClientConfig:
    """
    Configuration for the request client.

    All durations are in seconds.
    """

    # === Endpoint ===

    base_url: str = ""
    """Prefix applied to relative request URLs."""

    default_headers: dict[str, str] = field(default_factory=_default_headers)
    """Headers sent with every request; caller headers override them."""

    # === Request Processing ===

    timeout: float = 30.0
    """Per-attempt transport timeout in seconds."""

    # === Failure Handling ===

    max_retries: int = 3
    """Maximum retries after the first attempt for retryable failures."""

    retry_delay: float = 1.0
    """Base delay for exponential backoff (delay * 2 ** attempt)."""

    # === Caching ===

    cache_ttl: float = 300.0
    """Default time-to-live for cached responses in seconds."""

    cache_sweep_interval: float = 60.0
    """Interval between background sweeps of expired cache entries."""

    # === Rate Limiting ===

    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    """Client-side rate limit."""

    # === Metrics and Monitoring ===

    metrics_enabled: bool = True
    """Enable metrics collection."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be non-negative")
        if self.cache_ttl <= 0:
            raise ValueError("cache_ttl must be positive")
        if self.cache_sweep_interval <= 0:
            raise ValueError("cache_sweep_interval must be positive")
        if isinstance(self.rate_limit, dict):
            self.rate_limit = RateLimitConfig(**self.rate_limit)


__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "ClientConfig",
    "RateLimitConfig",
]
