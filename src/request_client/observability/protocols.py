# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metrics sink protocol used by RequestClient and ResponseCache.

Any object with these methods can be injected as ``metrics_collector``;
UnifiedMetricsCollector is the bundled implementation.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MetricsCollectorProtocol(Protocol):
    """
    Operations the client and cache record through.

    Names come from ``observability.constants``; label sets are limited to
    ``method``, ``outcome`` and ``error_type``.

    Example:
        >>> class LoggingSink:
        ...     def inc_counter(self, name, value=1, labels=None): log.info(name)
        ...     def set_gauge(self, name, value, labels=None): ...
        ...     def inc_gauge(self, name, value=1.0, labels=None): ...
        ...     def dec_gauge(self, name, value=1.0, labels=None): ...
        ...     def observe_histogram(self, name, value, labels=None): ...
        ...     def get_metrics(self): return {}
        >>>
        >>> client = RequestClient(metrics_collector=LoggingSink())
    """

    def inc_counter(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        """Count requests, retries, errors, rejections, refreshes and cache events."""
        ...

    def set_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        """Publish the current cache size."""
        ...

    def inc_gauge(
        self, name: str, value: float = 1.0, labels: dict[str, str] | None = None
    ) -> None: ...

    def dec_gauge(
        self, name: str, value: float = 1.0, labels: dict[str, str] | None = None
    ) -> None: ...

    def observe_histogram(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        """Record one transport call duration in seconds."""
        ...

    def get_metrics(self) -> dict[str, Any]:
        """Snapshot returned by ``RequestClient.get_metrics()``."""
        ...


__all__ = [
    "MetricsCollectorProtocol",
]
