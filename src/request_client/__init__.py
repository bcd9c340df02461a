# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Request Client - HTTP client wrapper for API-calling applications.

This library layers response caching, retries with exponential backoff,
request/response/error interceptors, client-side rate limiting and an auth
token refresh hook over a pluggable async transport.

Key Features:
    - In-memory response cache with per-request TTL and background sweep
    - Retry of network errors and 5xx responses with exponential backoff
    - Sync or async interceptors applied in registration order
    - Sliding window rate limit enforced before any network activity
    - Prometheus metrics through a unified collector

Quick Start:
    >>> from request_client import ClientConfig, create_client
    >>>
    >>> client = create_client(base_url="https://api.example.com", max_retries=2)
    >>> async with client:
    ...     client.set_auth_token("abc123")
    ...     users = await client.get("/users", params={"page": 1})
    ...     print(users.data, users.from_cache)

Main Exports:
    - RequestClient, create_client: The client and its factory
    - ClientConfig, RateLimitConfig: Configuration options
    - HttpxTransport, TransportProtocol: Default transport and its protocol
    - RequestOptions, RequestDescriptor, ResponseEnvelope: Request/response types
    - RequestClientError and subclasses: Error hierarchy

Version: 1.0.0
"""

__version__ = "1.0.0"

from .cache import CacheEntry, ResponseCache, build_cache_key
from .client import RequestClient, create_client
from .config import ClientConfig, RateLimitConfig
from .exceptions import (
    HTTPStatusError,
    NetworkError,
    RateLimitExceededError,
    RequestClientError,
    RequestTimeoutError,
    is_retryable,
)
from .interceptors import FunctionInterceptor, InterceptorChain
from .observability import UnifiedMetricsCollector, get_metrics_collector
from .protocols import InterceptorProtocol, TransportProtocol
from .ratelimit import SlidingWindowRateLimiter
from .transport import HttpxTransport
from .types import (
    AuthState,
    AuthToken,
    CacheStats,
    RateLimitStatus,
    RequestDescriptor,
    RequestOptions,
    ResponseEnvelope,
    TransportResponse,
)

__all__ = [
    "AuthState",
    "AuthToken",
    "CacheEntry",
    "CacheStats",
    "ClientConfig",
    "FunctionInterceptor",
    "HTTPStatusError",
    "HttpxTransport",
    "InterceptorChain",
    "InterceptorProtocol",
    "NetworkError",
    "RateLimitConfig",
    "RateLimitExceededError",
    "RateLimitStatus",
    "RequestClient",
    "RequestClientError",
    "RequestDescriptor",
    "RequestOptions",
    "RequestTimeoutError",
    "ResponseCache",
    "ResponseEnvelope",
    "SlidingWindowRateLimiter",
    "TransportProtocol",
    "TransportResponse",
    "UnifiedMetricsCollector",
    "__version__",
    "create_client",
    "get_metrics_collector",
    "is_retryable",
]
