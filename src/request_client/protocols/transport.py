# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for the HTTP transport the client delegates to."""

from typing import Protocol, runtime_checkable

from ..types.request import RequestDescriptor
from ..types.response import TransportResponse


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Minimal protocol for HTTP transports.

    The client owns caching, retries, interceptors and timeouts. A transport
    only needs to send one request and hand back the raw response.

    Implementations should raise ``NetworkError`` (or ``RequestTimeoutError``)
    for failures that happen before a status line is received. Any other
    exception is treated as a network-level failure by the client.
    """

    async def perform(self, request: RequestDescriptor) -> TransportResponse:
        """Send ``request`` and return the raw response."""
        ...

    async def aclose(self) -> None:
        """Release any resources held by the transport."""
        ...
