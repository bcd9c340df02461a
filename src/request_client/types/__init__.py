# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and constants."""

from .auth import REFRESH_LEEWAY_SECONDS, AuthState, AuthToken
from .request import (
    DELETE,
    GET,
    NON_CACHEABLE_METHODS,
    PATCH,
    POST,
    PUT,
    RequestDescriptor,
    RequestOptions,
)
from .response import ResponseEnvelope, TransportResponse
from .stats import CacheStats, RateLimitStatus

__all__ = [
    "DELETE",
    "GET",
    "NON_CACHEABLE_METHODS",
    "PATCH",
    "POST",
    "PUT",
    "REFRESH_LEEWAY_SECONDS",
    # Auth
    "AuthState",
    "AuthToken",
    # Snapshots
    "CacheStats",
    "RateLimitStatus",
    # Request types
    "RequestDescriptor",
    "RequestOptions",
    # Response types
    "ResponseEnvelope",
    "TransportResponse",
]
