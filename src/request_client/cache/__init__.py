# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Response caching."""

from .keys import build_cache_key, serialize_params
from .response_cache import DEFAULT_SWEEP_INTERVAL, CacheEntry, ResponseCache

__all__ = [
    "DEFAULT_SWEEP_INTERVAL",
    "CacheEntry",
    "ResponseCache",
    "build_cache_key",
    "serialize_params",
]
