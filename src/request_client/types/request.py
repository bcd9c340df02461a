# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request types for the request client.

This module defines the per-call options accepted by ``RequestClient.request``
and the outbound request descriptor passed through request interceptors to
the transport.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

GET = "GET"
POST = "POST"
PUT = "PUT"
PATCH = "PATCH"
DELETE = "DELETE"

NON_CACHEABLE_METHODS = frozenset({POST})
"""Methods that are never served from or written to the response cache."""


@dataclass
class RequestOptions:
    """
    Per-call options for a request.

    Attributes:
        method: HTTP method, normalized to upper case (default GET)
        headers: Headers merged over the client's default headers
        data: Body payload, JSON-serialized for non-GET methods
        params: Query parameters appended to the URL
        cache: Set to False to bypass the response cache for this call
        cache_ttl: Cache time-to-live override in seconds
        timeout: Per-attempt timeout override in seconds
    """

    method: str = GET
    headers: dict[str, str] | None = None
    data: Any = None
    params: Mapping[str, Any] | None = None
    cache: bool | None = None
    cache_ttl: float | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        self.method = (self.method or GET).upper()

    @property
    def cacheable(self) -> bool:
        """Whether the response may be served from or stored in the cache."""
        return self.method not in NON_CACHEABLE_METHODS and self.cache is not False


@dataclass
class RequestDescriptor:
    """
    Fully built outbound request.

    Request interceptors receive a descriptor and return a (possibly
    modified) descriptor; the transport receives the final one.

    Attributes:
        method: HTTP method
        url: Absolute URL including the serialized query string
        headers: Outbound headers
        body: Serialized body, or None
        timeout: Timeout in seconds for this attempt
        options: The options the descriptor was built from
        attempt: Zero-based attempt number within the retry loop
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None
    options: RequestOptions | None = None
    attempt: int = 0


__all__ = [
    "DELETE",
    "GET",
    "NON_CACHEABLE_METHODS",
    "PATCH",
    "POST",
    "PUT",
    "RequestDescriptor",
    "RequestOptions",
]
