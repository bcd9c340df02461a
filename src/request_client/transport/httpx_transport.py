# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Default transport backed by httpx.

The client enforces its own per-attempt timeout around ``perform``; the
descriptor timeout is also handed to httpx so the connection pool gives up
at the same point.
"""

import logging

import httpx

from ..exceptions import NetworkError, RequestTimeoutError
from ..types.request import RequestDescriptor
from ..types.response import TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    Transport that sends requests with ``httpx.AsyncClient``.

    The underlying client is created lazily and owned by the transport unless
    one is passed in, in which case ``aclose`` leaves it open.

    Example:
        >>> transport = HttpxTransport()
        >>> response = await transport.perform(
        ...     RequestDescriptor(method="GET", url="https://api.example.com/health")
        ... )
        >>> await transport.aclose()
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        follow_redirects: bool = True,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self.follow_redirects = follow_redirects
        self.max_connections = max_connections
        self.max_keepalive_connections = max_keepalive_connections

    def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                follow_redirects=self.follow_redirects,
                limits=httpx.Limits(
                    max_connections=self.max_connections,
                    max_keepalive_connections=self.max_keepalive_connections,
                ),
            )
            self._owns_client = True
        return self._client

    async def perform(self, request: RequestDescriptor) -> TransportResponse:
        """
        Send one request.

        Raises:
            RequestTimeoutError: If httpx reports a connect/read/write/pool timeout
            NetworkError: For any other transport-level failure
        """
        client = self._ensure_client()
        timeout = httpx.USE_CLIENT_DEFAULT
        if request.timeout is not None:
            timeout = httpx.Timeout(request.timeout)
        try:
            response = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"Request to {request.url} timed out: {e}", timeout=request.timeout
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Request to {request.url} failed: {e}") from e

        return TransportResponse(
            status=response.status_code,
            reason=response.reason_phrase,
            headers=dict(response.headers),
            content=response.content,
        )

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed httpx client")


__all__ = ["HttpxTransport"]
