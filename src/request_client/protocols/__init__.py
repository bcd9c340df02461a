# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for request client components.

This module provides Protocol classes that define the interfaces for
pluggable components of the request client.

Available protocols:
- TransportProtocol: Interface for transports that send a single HTTP request
- InterceptorProtocol: Interface for request, response and error interceptors
"""

from .interceptor import InterceptorProtocol
from .transport import TransportProtocol

__all__ = [
    "InterceptorProtocol",
    "TransportProtocol",
]
