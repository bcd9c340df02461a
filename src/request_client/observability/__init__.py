# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the request client.

Classes:
    UnifiedMetricsCollector: Unified metrics collector supporting dict and Prometheus.

Protocols:
    MetricsCollectorProtocol: Protocol for metrics collection backends.

Functions:
    get_metrics_collector: Get the global metrics collector singleton.
    reset_metrics_collector: Reset the global metrics collector singleton.
"""

from .collector import (
    METRIC_DEFINITIONS,
    MetricDefinition,
    UnifiedMetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from .constants import (
    ACTIVE_REQUESTS,
    CACHE_ENTRIES,
    CACHE_EXPIRATIONS_TOTAL,
    CACHE_HITS_TOTAL,
    CACHE_MISSES_TOTAL,
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    RATE_LIMIT_REJECTIONS_TOTAL,
    REQUEST_DURATION_SECONDS,
    REQUEST_ERRORS_TOTAL,
    REQUEST_RETRIES_TOTAL,
    REQUESTS_TOTAL,
    TOKEN_REFRESHES_TOTAL,
)
from .protocols import MetricsCollectorProtocol

__all__ = [
    "ACTIVE_REQUESTS",
    "CACHE_ENTRIES",
    "CACHE_EXPIRATIONS_TOTAL",
    "CACHE_HITS_TOTAL",
    "CACHE_MISSES_TOTAL",
    "LATENCY_BUCKETS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "RATE_LIMIT_REJECTIONS_TOTAL",
    "REQUESTS_TOTAL",
    "REQUEST_DURATION_SECONDS",
    "REQUEST_ERRORS_TOTAL",
    "REQUEST_RETRIES_TOTAL",
    "TOKEN_REFRESHES_TOTAL",
    "MetricDefinition",
    "MetricsCollectorProtocol",
    "UnifiedMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
