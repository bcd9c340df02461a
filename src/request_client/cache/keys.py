# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Deterministic cache keys for cacheable requests."""

import json
from collections.abc import Mapping
from typing import Any


def serialize_params(params: Mapping[str, Any] | None) -> str:
    """Canonical JSON for query params (sorted keys), or "" when absent."""
    if not params:
        return ""
    return json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)


def build_cache_key(
    method: str, url: str, params: Mapping[str, Any] | None = None
) -> str:
    """
    Build the cache key for a request.

    Example:
        >>> build_cache_key("get", "https://api.example.com/users", {"page": 2})
        'GET:https://api.example.com/users:{"page":2}'
    """
    return f"{method.upper()}:{url}:{serialize_params(params)}"


__all__ = [
    "build_cache_key",
    "serialize_params",
]
