"""
Shared fixtures for request client unit tests.

Provides a scripted in-memory transport, a manually advanced clock and a
recording sleep so pipeline behavior can be checked without network access
or real waiting.
"""

import json
from collections.abc import Callable
from typing import Any

import pytest

from request_client import ClientConfig, RequestClient
from request_client.observability import UnifiedMetricsCollector
from request_client.types import RequestDescriptor, TransportResponse

# ============================================================================
# Helpers
# ============================================================================


def build_json_response(
    status: int = 200, body: Any = None, reason: str = "OK"
) -> TransportResponse:
    """Build a JSON TransportResponse."""
    return TransportResponse(
        status=status,
        reason=reason,
        headers={"Content-Type": "application/json"},
        content=json.dumps(body if body is not None else {}).encode("utf-8"),
    )


class FakeTransport:
    """
    Transport that replays scripted outcomes and records every request.

    Each scripted item is a TransportResponse, an exception instance to raise,
    or a callable taking the descriptor and returning either. When the script
    is exhausted the last item is reused.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes) or [build_json_response(200, {"ok": True})]
        self.requests: list[RequestDescriptor] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def perform(self, request: RequestDescriptor) -> TransportResponse:
        self.requests.append(request)
        index = min(len(self.requests) - 1, len(self.outcomes) - 1)
        outcome = self.outcomes[index]
        if callable(outcome) and not isinstance(outcome, TransportResponse):
            outcome = outcome(request)
            if hasattr(outcome, "__await__"):
                outcome = await outcome
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.closed = True


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def sleep():
    """Create a recording sleep."""
    return RecordingSleep()


@pytest.fixture
def collector():
    """Create a dict-only metrics collector."""
    return UnifiedMetricsCollector(enable_prometheus=False)


@pytest.fixture
def transport():
    """Create a transport that always answers 200 with a JSON body."""
    return FakeTransport()


@pytest.fixture
def make_client(clock, sleep, collector) -> Callable[..., RequestClient]:
    """Factory building a client wired to the fake clock, sleep and collector."""

    def _make(transport: Any = None, **config_kwargs: Any) -> RequestClient:
        config_kwargs.setdefault("base_url", "https://api.example.com")
        return RequestClient(
            ClientConfig(**config_kwargs),
            transport=transport if transport is not None else FakeTransport(),
            metrics_collector=collector,
            clock=clock,
            sleep=sleep,
        )

    return _make


@pytest.fixture
def json_response():
    """Builder for JSON transport responses."""
    return build_json_response


@pytest.fixture
def make_transport():
    """The FakeTransport class, for scripting outcomes per test."""
    return FakeTransport
