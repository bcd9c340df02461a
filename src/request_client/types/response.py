# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Response types for the request client.

TransportResponse is what a transport hands back; ResponseEnvelope is what
callers of the client receive.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass
class TransportResponse:
    """
    Raw response produced by a transport.

    Header names are normalized to lower case.

    Attributes:
        status: HTTP status code
        reason: Reason phrase (may be empty)
        headers: Response headers
        content: Raw body bytes
    """

    status: int
    reason: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""

    def __post_init__(self) -> None:
        self.headers = {k.lower(): v for k, v in self.headers.items()}

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")


@dataclass
class ResponseEnvelope:
    """
    Successful response returned to callers.

    Attributes:
        status: HTTP status code
        status_text: Reason phrase
        headers: Response headers (lower-case names)
        data: Parsed body: JSON value, text, or bytes
        from_cache: True when served from the response cache
    """

    status: int
    status_text: str
    headers: dict[str, str]
    data: Any
    from_cache: bool = False

    def as_cached(self) -> "ResponseEnvelope":
        """Return a copy tagged as served from cache."""
        return replace(self, from_cache=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "status_text": self.status_text,
            "headers": dict(self.headers),
            "data": self.data,
            "from_cache": self.from_cache,
        }


__all__ = [
    "ResponseEnvelope",
    "TransportResponse",
]
