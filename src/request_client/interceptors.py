# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Interceptor chains.

An InterceptorChain is an ordered sequence of interceptors applied as a
strict left-to-right fold: each interceptor receives the value returned by
the previous one. Interceptors run one at a time, never concurrently. An
exception raised by an interceptor stops the fold and propagates.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator
from typing import Any, Generic, TypeVar

from .protocols.interceptor import InterceptorProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FunctionInterceptor(Generic[T]):
    """Adapts a plain (sync or async) callable to InterceptorProtocol."""

    def __init__(self, func: Callable[[T], T | Awaitable[T]]) -> None:
        self.func = func

    def transform(self, value: T) -> T | Awaitable[T]:
        return self.func(value)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"FunctionInterceptor({name})"


def as_interceptor(obj: Any) -> InterceptorProtocol[Any]:
    """Return ``obj`` as an interceptor, wrapping bare callables."""
    if isinstance(obj, InterceptorProtocol):
        return obj
    if callable(obj):
        return FunctionInterceptor(obj)
    raise TypeError(
        f"Interceptor must be callable or define transform(), got {type(obj).__name__}"
    )


class InterceptorChain(Generic[T]):
    """
    Ordered chain of interceptors for one stage (request, response or error).

    Example:
        >>> chain: InterceptorChain[dict] = InterceptorChain("request")
        >>> chain.add(lambda req: {**req, "a": 1})
        >>> result = await chain.run({})
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._interceptors: list[InterceptorProtocol[T]] = []

    def add(self, interceptor: Any) -> InterceptorProtocol[T]:
        """
        Append an interceptor to the end of the chain.

        Args:
            interceptor: An object with ``transform`` or a plain callable

        Returns:
            The registered interceptor (pass it to ``remove`` to unregister)
        """
        registered = as_interceptor(interceptor)
        self._interceptors.append(registered)
        logger.debug(
            f"Registered {self.name} interceptor {registered!r} "
            f"(chain length {len(self._interceptors)})"
        )
        return registered

    def remove(self, interceptor: Any) -> bool:
        """Remove a previously registered interceptor. Returns True if found."""
        for index, registered in enumerate(self._interceptors):
            if registered is interceptor or (
                isinstance(registered, FunctionInterceptor)
                and registered.func is interceptor
            ):
                del self._interceptors[index]
                return True
        return False

    def clear(self) -> None:
        self._interceptors.clear()

    async def run(self, value: T) -> T:
        """Fold ``value`` through every interceptor in registration order."""
        for interceptor in self._interceptors:
            result = interceptor.transform(value)
            if inspect.isawaitable(result):
                result = await result
            value = result
        return value

    def __len__(self) -> int:
        return len(self._interceptors)

    def __iter__(self) -> Iterator[InterceptorProtocol[T]]:
        return iter(list(self._interceptors))


__all__ = [
    "FunctionInterceptor",
    "InterceptorChain",
    "as_interceptor",
]
