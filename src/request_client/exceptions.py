# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the request client library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from RequestClientError, making it easy to catch
all client-related exceptions with a single except clause.
"""

from collections.abc import Mapping
from typing import Any


class RequestClientError(Exception):
    """Base exception for all request client errors.

    This is the root exception class for the request client library.
    Catch this exception to handle any error originating from the library.

    Example:
        try:
            response = await client.get("/users")
        except RequestClientError as e:
            logger.error(f"Request failed: {e}")
    """

    pass


class RateLimitExceededError(RequestClientError):
    """Raised when the client-side rate window has no remaining quota.

    This error is produced locally before any network activity and is never
    retried by the client.

    Attributes:
        retry_after: Whole seconds until the oldest request in the window
            falls out of it.

    Example:
        try:
            await client.get("/items")
        except RateLimitExceededError as e:
            await asyncio.sleep(e.retry_after)
    """

    def __init__(self, message: str | None = None, retry_after: int = 0):
        if message is None:
            message = f"Rate limit exceeded. Please wait {retry_after} seconds."
        super().__init__(message)
        self.retry_after = retry_after


class NetworkError(RequestClientError):
    """Raised when the transport fails before a response status is available.

    Covers connection failures, DNS errors and protocol errors. Network
    errors carry no status code and are always retryable.
    """

    status: int | None = None


class RequestTimeoutError(NetworkError):
    """Raised when a single transport attempt exceeds its timeout.

    Attributes:
        timeout: The timeout in seconds that was exceeded, if known.
    """

    def __init__(self, message: str = "Request timed out", timeout: float | None = None):
        super().__init__(message)
        self.timeout = timeout


class HTTPStatusError(RequestClientError):
    """Raised when the server answers with a status outside the 2xx range.

    Attributes:
        status: HTTP status code of the response.
        data: Parsed response body (JSON value, text, or bytes).
        headers: Response headers.

    Example:
        try:
            await client.get("/missing")
        except HTTPStatusError as e:
            if e.status == 404:
                return None
            raise
    """

    def __init__(
        self,
        status: int,
        data: Any = None,
        headers: Mapping[str, str] | None = None,
        message: str | None = None,
    ):
        if message is None:
            message = _message_from_body(data) or f"HTTP Error: {status}"
        super().__init__(message)
        self.status = status
        self.data = data
        self.headers = headers if headers is not None else {}


def _message_from_body(data: Any) -> str | None:
    if isinstance(data, Mapping):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def is_retryable(error: BaseException) -> bool:
    """Return True if a failed attempt should be retried.

    Errors without a status code (network level) and errors with a status
    of 500 or above are retryable. Local rate limit rejections never are.
    """
    if isinstance(error, RateLimitExceededError):
        return False
    status = getattr(error, "status", None)
    if not isinstance(status, int):
        return True
    return status >= 500


__all__ = [
    "HTTPStatusError",
    "NetworkError",
    "RateLimitExceededError",
    "RequestClientError",
    "RequestTimeoutError",
    "is_retryable",
]
