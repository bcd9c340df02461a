# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Client-side rate limiting."""

from .sliding_window import SlidingWindowRateLimiter

__all__ = ["SlidingWindowRateLimiter"]
