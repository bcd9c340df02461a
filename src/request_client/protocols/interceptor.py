# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for request, response and error interceptors."""

from collections.abc import Awaitable
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class InterceptorProtocol(Protocol[T]):
    """
    A registered transformation applied to a request, response, or error.

    ``transform`` receives the current value and returns the value handed to
    the next interceptor. It may be a plain method or a coroutine function.

    Example:
        >>> class AddTraceHeader:
        ...     def transform(self, request):
        ...         request.headers["X-Trace-Id"] = new_trace_id()
        ...         return request
        >>>
        >>> isinstance(AddTraceHeader(), InterceptorProtocol)
        True
    """

    def transform(self, value: T) -> T | Awaitable[T]:
        """Return the (possibly modified) value."""
        ...
