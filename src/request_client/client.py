# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
RequestClient: an HTTP client wrapper with caching, retries, interceptors,
client-side rate limiting and an auth token refresh hook.

Pipeline for ``request(url, ...)``:

    token refresh check -> rate limit -> URL resolution -> cache lookup
    -> retry loop [build request -> request interceptors -> transport
       (timeout) -> parse -> status check -> response interceptors]
    -> cache store

Any error that escapes the pipeline is passed through the error
interceptors before it reaches the caller.
"""

import asyncio
import codecs
import dataclasses
import inspect
import json
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any
from urllib.parse import urlencode

from .cache.keys import build_cache_key
from .cache.response_cache import ResponseCache
from .config import ClientConfig
from .exceptions import (
    HTTPStatusError,
    NetworkError,
    RateLimitExceededError,
    RequestClientError,
    RequestTimeoutError,
    is_retryable,
)
from .interceptors import InterceptorChain
from .observability.collector import get_metrics_collector
from .observability.constants import (
    ACTIVE_REQUESTS,
    RATE_LIMIT_REJECTIONS_TOTAL,
    REQUEST_DURATION_SECONDS,
    REQUEST_ERRORS_TOTAL,
    REQUEST_RETRIES_TOTAL,
    REQUESTS_TOTAL,
    TOKEN_REFRESHES_TOTAL,
)
from .observability.protocols import MetricsCollectorProtocol
from .protocols.interceptor import InterceptorProtocol
from .protocols.transport import TransportProtocol
from .ratelimit.sliding_window import SlidingWindowRateLimiter
from .transport.httpx_transport import HttpxTransport
from .types.auth import AuthState, AuthToken
from .types.request import DELETE, GET, PATCH, POST, PUT, RequestDescriptor, RequestOptions
from .types.response import ResponseEnvelope, TransportResponse
from .types.stats import CacheStats, RateLimitStatus

logger = logging.getLogger(__name__)

RefreshHandler = Callable[["RequestClient"], Awaitable[None] | None]


class RequestClient:
    """
    HTTP client wrapper layering caching, retry with exponential backoff,
    interceptors and a sliding-window rate limit over a transport.

    The client is single-event-loop: the cache and rate window are owned by
    the instance and are not guarded for use from several threads.
    Concurrent identical requests are not coalesced.

    Example:
        >>> async with RequestClient(ClientConfig(base_url="https://api.example.com")) as client:
        ...     client.set_auth_token("abc123")
        ...     users = await client.get("/users", params={"page": 1})
        ...     created = await client.post("/users", data={"name": "Ada"})
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: TransportProtocol | None = None,
        *,
        refresh_handler: RefreshHandler | None = None,
        metrics_collector: MetricsCollectorProtocol | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Client configuration (defaults to ``ClientConfig()``)
            transport: Transport used to send requests. When omitted an
                ``HttpxTransport`` is created on first use and closed by ``close``.
            refresh_handler: Called (sync or async, with the client) when the
                access token is about to expire; expected to call
                ``set_auth_token``/``set_refresh_token``.
            metrics_collector: Metrics sink (defaults to the global collector
                when ``config.metrics_enabled``)
            clock: Monotonic clock used for cache expiry, rate window and
                token expiry
            sleep: Coroutine used for retry backoff
        """
        self.config = config or ClientConfig()
        self._transport = transport
        self._owns_transport = transport is None
        self._refresh_handler = refresh_handler
        self._clock = clock
        self._sleep = sleep

        if metrics_collector is None and self.config.metrics_enabled:
            metrics_collector = get_metrics_collector()
        self._metrics = metrics_collector if self.config.metrics_enabled else None

        self.auth = AuthState()

        self.request_interceptors: InterceptorChain[RequestDescriptor] = InterceptorChain(
            "request"
        )
        self.response_interceptors: InterceptorChain[ResponseEnvelope] = (
            InterceptorChain("response")
        )
        self.error_interceptors: InterceptorChain[Any] = InterceptorChain("error")

        self.cache = ResponseCache(
            sweep_interval=self.config.cache_sweep_interval,
            clock=clock,
            metrics_collector=self._metrics,
        )
        self.rate_limiter = SlidingWindowRateLimiter(self.config.rate_limit, clock=clock)

    # === Lifecycle ===

    async def start(self) -> None:
        """Start background cache maintenance."""
        await self.cache.start()

    async def close(self) -> None:
        """Stop cache maintenance, clear the cache and close an owned transport."""
        await self.cache.stop()
        if self._owns_transport and self._transport is not None:
            await self._transport.aclose()
            self._transport = None

    async def __aenter__(self) -> "RequestClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, _exc_val: Any, _exc_tb: Any) -> None:
        await self.close()

    @property
    def transport(self) -> TransportProtocol:
        """Transport in use, creating the default httpx transport on first access."""
        if self._transport is None:
            self._transport = HttpxTransport()
            self._owns_transport = True
        return self._transport

    # === Authentication ===

    def set_auth_token(self, token: str, scheme: str = "Bearer") -> None:
        """Set the credential sent as ``Authorization: {scheme} {token}``."""
        self.auth.token = AuthToken(value=token, scheme=scheme)

    def set_refresh_token(self, refresh_token: str, expires_in: float = 3600.0) -> None:
        """
        Set the refresh token and the access token lifetime.

        Args:
            refresh_token: Token handed to the refresh logic
            expires_in: Seconds until the current access token expires
        """
        self.auth.refresh_token = refresh_token
        self.auth.expires_at = self._clock() + expires_in

    def clear_auth(self) -> None:
        self.auth.clear()

    async def refresh_auth_token(self) -> None:
        """
        Refresh the access token before it expires.

        Completes before the outbound request is built, so headers always use
        the refreshed token. Override in a subclass or pass ``refresh_handler``;
        without either, the token is left unchanged.
        """
        if self._refresh_handler is None:
            logger.warning(
                "Token refresh not implemented. Pass refresh_handler or override "
                "refresh_auth_token()."
            )
            return

        self._inc(TOKEN_REFRESHES_TOTAL)
        result = self._refresh_handler(self)
        if inspect.isawaitable(result):
            await result

    # === Interceptors ===

    def add_request_interceptor(self, interceptor: Any) -> InterceptorProtocol[Any]:
        """Register a request interceptor (callable or object with ``transform``)."""
        return self.request_interceptors.add(interceptor)

    def add_response_interceptor(self, interceptor: Any) -> InterceptorProtocol[Any]:
        """Register a response interceptor (callable or object with ``transform``)."""
        return self.response_interceptors.add(interceptor)

    def add_error_interceptor(self, interceptor: Any) -> InterceptorProtocol[Any]:
        """Register an error interceptor (callable or object with ``transform``)."""
        return self.error_interceptors.add(interceptor)

    def remove_request_interceptor(self, interceptor: Any) -> bool:
        return self.request_interceptors.remove(interceptor)

    def remove_response_interceptor(self, interceptor: Any) -> bool:
        return self.response_interceptors.remove(interceptor)

    def remove_error_interceptor(self, interceptor: Any) -> bool:
        return self.error_interceptors.remove(interceptor)

    # === Requests ===

    async def request(
        self, url: str, options: RequestOptions | None = None, **kwargs: Any
    ) -> ResponseEnvelope:
        """
        Perform a request through the full pipeline.

        Args:
            url: Absolute URL, or a path appended to ``config.base_url``
            options: Request options; keyword arguments override its fields
            **kwargs: ``RequestOptions`` fields (method, headers, data, params,
                cache, cache_ttl, timeout)

        Returns:
            The response envelope (``from_cache`` set on cache hits)

        Raises:
            RateLimitExceededError: Client-side rate window is full
            HTTPStatusError: Non-2xx response after retries
            NetworkError: Transport failure (including timeouts) after retries
            Exception: Whatever the error interceptors turned the error into
        """
        if options is None:
            options = RequestOptions(**kwargs)
        elif kwargs:
            options = dataclasses.replace(options, **kwargs)

        try:
            return await self._request(url, options)
        except asyncio.CancelledError:
            raise
        except Exception as error:
            self._inc(REQUESTS_TOTAL, {"method": options.method, "outcome": "error"})
            self._inc(REQUEST_ERRORS_TOTAL, {"error_type": type(error).__name__})

            handled = await self.error_interceptors.run(error)
            if handled is error:
                raise
            if isinstance(handled, BaseException):
                raise handled from error
            raise RequestClientError(
                f"Error interceptor replaced {type(error).__name__} with "
                f"non-exception value {handled!r}"
            ) from error

    async def _request(self, url: str, options: RequestOptions) -> ResponseEnvelope:
        if self.auth.needs_refresh(self._clock()):
            await self.refresh_auth_token()

        try:
            self.rate_limiter.acquire()
        except RateLimitExceededError:
            self._inc(RATE_LIMIT_REJECTIONS_TOTAL)
            raise

        full_url = self.resolve_url(url)

        cache_key: str | None = None
        if options.cacheable:
            cache_key = build_cache_key(options.method, full_url, options.params)
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for {cache_key}")
                self._inc(REQUESTS_TOTAL, {"method": options.method, "outcome": "cache_hit"})
                return cached

        response = await self._execute_with_retry(full_url, options)

        if cache_key is not None:
            ttl = options.cache_ttl if options.cache_ttl is not None else self.config.cache_ttl
            # A non-positive TTL expires immediately, so there is nothing to store
            if ttl > 0:
                self.cache.set(cache_key, response, ttl)

        self._inc(REQUESTS_TOTAL, {"method": options.method, "outcome": "success"})
        return response

    async def _execute_with_retry(
        self, url: str, options: RequestOptions
    ) -> ResponseEnvelope:
        """
        Run attempts until one succeeds or the failure is terminal.

        A failure is retried while ``attempt < max_retries`` and the error is
        retryable (no status code, or status >= 500). Attempt ``n`` waits
        ``retry_delay * 2 ** n`` seconds before the next one.
        """
        attempt = 0
        while True:
            try:
                return await self._perform_attempt(url, options, attempt)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                if attempt >= self.config.max_retries or not is_retryable(e):
                    raise

                delay = self.calculate_backoff(attempt)
                logger.warning(
                    f"{options.method} {url} failed on attempt {attempt + 1} "
                    f"({type(e).__name__}: {e}); retrying in {delay:.2f}s"
                )
                self._inc(REQUEST_RETRIES_TOTAL, {"method": options.method})
                await self._sleep(delay)
                attempt += 1

    async def _perform_attempt(
        self, url: str, options: RequestOptions, attempt: int
    ) -> ResponseEnvelope:
        descriptor = self.build_request(url, options, attempt)
        descriptor = await self.request_interceptors.run(descriptor)

        raw = await self._send(descriptor)
        envelope = self.parse_response(raw)

        return await self.response_interceptors.run(envelope)

    async def _send(self, descriptor: RequestDescriptor) -> TransportResponse:
        """Call the transport, bounded by the descriptor's timeout."""
        timeout = descriptor.timeout if descriptor.timeout is not None else self.config.timeout
        started = time.perf_counter()
        if self._metrics is not None:
            self._metrics.inc_gauge(ACTIVE_REQUESTS)
        try:
            return await asyncio.wait_for(self.transport.perform(descriptor), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(
                f"{descriptor.method} {descriptor.url} timed out after {timeout}s",
                timeout=timeout,
            ) from e
        except (asyncio.CancelledError, RequestClientError):
            raise
        except Exception as e:
            raise NetworkError(f"{descriptor.method} {descriptor.url} failed: {e}") from e
        finally:
            if self._metrics is not None:
                self._metrics.dec_gauge(ACTIVE_REQUESTS)
                self._metrics.observe_histogram(
                    REQUEST_DURATION_SECONDS,
                    time.perf_counter() - started,
                    {"method": descriptor.method},
                )

    def calculate_backoff(self, attempt: int) -> float:
        """Delay in seconds before retrying after the zero-based ``attempt``."""
        return float(self.config.retry_delay * (2**attempt))

    # === Request building and response parsing ===

    def resolve_url(self, url: str) -> str:
        """Pass absolute URLs through; prefix anything else with ``base_url``."""
        if url.startswith("http"):
            return url
        return f"{self.config.base_url}{url}"

    def build_request(
        self, url: str, options: RequestOptions, attempt: int = 0
    ) -> RequestDescriptor:
        """Build the outbound descriptor for one attempt."""
        headers = _merge_headers(self.config.default_headers, options.headers)

        authorization = self.auth.authorization_header()
        if authorization is not None:
            headers = _merge_headers(headers, {"Authorization": authorization})

        body: bytes | None = None
        if options.method != GET and options.data is not None:
            body = json.dumps(options.data).encode("utf-8")

        if options.params:
            query = urlencode(options.params, doseq=True)
            if query:
                separator = "&" if "?" in url else "?"
                url = f"{url}{separator}{query}"

        return RequestDescriptor(
            method=options.method,
            url=url,
            headers=headers,
            body=body,
            timeout=options.timeout if options.timeout is not None else self.config.timeout,
            options=options,
            attempt=attempt,
        )

    def parse_response(self, raw: TransportResponse) -> ResponseEnvelope:
        """
        Decode the body by content type and check the status.

        JSON bodies are decoded (falling back to text if malformed), text
        bodies become ``str``, anything else stays ``bytes``.

        Raises:
            HTTPStatusError: If the status is outside 200-299
        """
        content_type = raw.content_type.lower()
        data: Any
        if "application/json" in content_type or "+json" in content_type:
            text = raw.content.decode(_charset(content_type), errors="replace")
            try:
                data = json.loads(text) if text.strip() else None
            except ValueError:
                data = text
        elif "text" in content_type:
            data = raw.content.decode(_charset(content_type), errors="replace")
        else:
            data = raw.content

        headers = dict(raw.headers)
        if not raw.ok:
            raise HTTPStatusError(raw.status, data, headers)

        return ResponseEnvelope(
            status=raw.status,
            status_text=raw.reason,
            headers=headers,
            data=data,
            from_cache=False,
        )

    # === Verb wrappers ===

    async def get(self, url: str, **kwargs: Any) -> ResponseEnvelope:
        return await self.request(url, **{**kwargs, "method": GET})

    async def post(self, url: str, data: Any = None, **kwargs: Any) -> ResponseEnvelope:
        return await self.request(url, **{**kwargs, "method": POST, "data": data, "cache": False})

    async def put(self, url: str, data: Any = None, **kwargs: Any) -> ResponseEnvelope:
        return await self.request(url, **{**kwargs, "method": PUT, "data": data, "cache": False})

    async def patch(self, url: str, data: Any = None, **kwargs: Any) -> ResponseEnvelope:
        return await self.request(
            url, **{**kwargs, "method": PATCH, "data": data, "cache": False}
        )

    async def delete(self, url: str, **kwargs: Any) -> ResponseEnvelope:
        return await self.request(url, **{**kwargs, "method": DELETE, "cache": False})

    # === Cache management ===

    def cache_key_for(
        self, url: str, method: str = GET, params: Mapping[str, Any] | None = None
    ) -> str:
        """Cache key a request with these arguments would use."""
        return build_cache_key(method, self.resolve_url(url), params)

    def clear_cache(self, cache_key: str) -> None:
        """Remove one cache entry. No-op if absent."""
        self.cache.delete(cache_key)

    def clear_all_cache(self) -> None:
        """Remove every cache entry."""
        self.cache.clear()

    # === Observability ===

    def get_rate_limit_status(self) -> RateLimitStatus:
        return self.rate_limiter.status()

    def get_cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def get_metrics(self) -> dict[str, Any]:
        """Snapshot of the metrics collector ({} when metrics are disabled)."""
        if self._metrics is None:
            return {}
        return self._metrics.get_metrics()

    def _inc(self, name: str, labels: dict[str, str] | None = None) -> None:
        if self._metrics is not None:
            self._metrics.inc_counter(name, labels=labels)


def _merge_headers(
    base: Mapping[str, str], overrides: Mapping[str, str] | None
) -> dict[str, str]:
    """Overlay ``overrides`` on ``base``, replacing names case-insensitively."""
    merged = dict(base)
    for name, value in (overrides or {}).items():
        for existing in [key for key in merged if key.lower() == name.lower()]:
            del merged[existing]
        merged[name] = value
    return merged


def _charset(content_type: str) -> str:
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key == "charset" and value:
            charset = value.strip('"')
            try:
                codecs.lookup(charset)
            except LookupError:
                break
            return charset
    return "utf-8"


# Factory function for easy creation with dependency injection
def create_client(
    base_url: str = "",
    transport: TransportProtocol | None = None,
    config: ClientConfig | None = None,
    **kwargs: Any,
) -> RequestClient:
    """
    Factory function to create a RequestClient.

    Args:
        base_url: Base URL for relative paths (ignored when ``config`` is given)
        transport: Optional transport (defaults to an owned HttpxTransport)
        config: Optional full configuration
        **kwargs: ``ClientConfig`` fields when ``config`` is omitted, plus
            ``refresh_handler``, ``metrics_collector``, ``clock`` and ``sleep``

    Returns:
        Configured RequestClient instance

    Raises:
        ValueError: If configuration values are invalid
    """
    client_kwargs = {
        name: kwargs.pop(name)
        for name in ("refresh_handler", "metrics_collector", "clock", "sleep")
        if name in kwargs
    }
    if config is None:
        config = ClientConfig(base_url=base_url, **kwargs)
    elif kwargs:
        raise ValueError(f"Unexpected configuration arguments with config: {sorted(kwargs)}")

    return RequestClient(config=config, transport=transport, **client_kwargs)


__all__ = [
    "RefreshHandler",
    "RequestClient",
    "create_client",
]
