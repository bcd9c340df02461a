# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Authentication state for the request client.
"""

from dataclasses import dataclass

REFRESH_LEEWAY_SECONDS = 60.0
"""Refresh is triggered when the token expires within this many seconds."""


@dataclass(frozen=True)
class AuthToken:
    """
    Credential sent in the Authorization header.

    Attributes:
        value: Token or encoded credentials
        scheme: Authorization scheme, e.g. "Bearer" or "Basic"
    """

    value: str
    scheme: str = "Bearer"

    def header_value(self) -> str:
        return f"{self.scheme} {self.value}"


@dataclass
class AuthState:
    """
    Mutable authentication state owned by a client.

    Attributes:
        token: Current access credential, if any
        refresh_token: Refresh token, if any
        expires_at: Access token expiry on the client's monotonic clock
    """

    token: AuthToken | None = None
    refresh_token: str | None = None
    expires_at: float | None = None

    def authorization_header(self) -> str | None:
        if self.token is None:
            return None
        return self.token.header_value()

    def needs_refresh(self, now: float, leeway: float = REFRESH_LEEWAY_SECONDS) -> bool:
        """True if a refresh token is set and expiry is within ``leeway`` of ``now``."""
        if self.refresh_token is None or self.expires_at is None:
            return False
        return now >= self.expires_at - leeway

    def clear(self) -> None:
        self.token = None
        self.refresh_token = None
        self.expires_at = None


__all__ = [
    "REFRESH_LEEWAY_SECONDS",
    "AuthState",
    "AuthToken",
]
