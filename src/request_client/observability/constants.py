# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the `request_client_` prefix.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`
    - Gauges use present-tense descriptive names

Label Best Practices:
    To prevent label cardinality explosion, use only:
    - `method` - HTTP method (GET, POST, ...)
    - `outcome` - Request outcome (enum: success, cache_hit, error)
    - `error_type` - Exception class name

    NEVER use:
    - `url` - Unbounded for parameterized paths
    - `cache_key` - Unique per request
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "request_client"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Request Metrics (client.py)
# =============================================================================

REQUESTS_TOTAL = f"{METRIC_PREFIX}_requests_total"
"""Total requests handled by the client, by method and outcome."""

REQUEST_RETRIES_TOTAL = f"{METRIC_PREFIX}_request_retries_total"
"""Total retry attempts scheduled after a retryable failure."""

REQUEST_ERRORS_TOTAL = f"{METRIC_PREFIX}_request_errors_total"
"""Total requests that ended in an error, by error type."""

RATE_LIMIT_REJECTIONS_TOTAL = f"{METRIC_PREFIX}_rate_limit_rejections_total"
"""Total requests rejected by the client-side rate window."""

TOKEN_REFRESHES_TOTAL = f"{METRIC_PREFIX}_token_refreshes_total"
"""Total invocations of the auth token refresh hook."""

REQUEST_DURATION_SECONDS = f"{METRIC_PREFIX}_request_duration_seconds"
"""Duration of transport calls (histogram)."""


# =============================================================================
# Active State Gauges
# =============================================================================

ACTIVE_REQUESTS = f"{METRIC_PREFIX}_active_requests"
"""Number of currently in-flight transport calls."""

CACHE_ENTRIES = f"{METRIC_PREFIX}_cache_entries"
"""Current number of cached responses."""


# =============================================================================
# Cache Metrics (cache/response_cache.py)
# =============================================================================

CACHE_HITS_TOTAL = f"{METRIC_PREFIX}_cache_hits_total"
"""Total cache hits."""

CACHE_MISSES_TOTAL = f"{METRIC_PREFIX}_cache_misses_total"
"""Total cache misses (absent or expired)."""

CACHE_EXPIRATIONS_TOTAL = f"{METRIC_PREFIX}_cache_expirations_total"
"""Total entries removed because their TTL elapsed."""


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS: list[float] = [
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
]
"""Default latency buckets for request duration histograms (in seconds)."""


__all__ = [
    # Gauges
    "ACTIVE_REQUESTS",
    "CACHE_ENTRIES",
    # Cache
    "CACHE_EXPIRATIONS_TOTAL",
    "CACHE_HITS_TOTAL",
    "CACHE_MISSES_TOTAL",
    # Buckets
    "LATENCY_BUCKETS",
    # Prefix
    "METRIC_PREFIX",
    "RATE_LIMIT_REJECTIONS_TOTAL",
    "REQUESTS_TOTAL",
    "REQUEST_DURATION_SECONDS",
    "REQUEST_ERRORS_TOTAL",
    # Requests
    "REQUEST_RETRIES_TOTAL",
    "TOKEN_REFRESHES_TOTAL",
]
