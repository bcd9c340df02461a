"""Tests for the httpx-backed transport."""

import json

import httpx
import pytest

from request_client.exceptions import NetworkError, RequestTimeoutError
from request_client.protocols import TransportProtocol
from request_client.transport import HttpxTransport
from request_client.types import RequestDescriptor


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHttpxTransport:
    """Tests for HttpxTransport.perform and aclose."""

    def test_satisfies_protocol(self):
        """HttpxTransport implements TransportProtocol."""
        assert isinstance(HttpxTransport(), TransportProtocol)

    @pytest.mark.asyncio
    async def test_sends_descriptor(self):
        """Method, URL, headers and body are forwarded to httpx."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = request.content
            return httpx.Response(201, json={"id": 7})

        transport = HttpxTransport(client=mock_client(handler))
        response = await transport.perform(
            RequestDescriptor(
                method="POST",
                url="https://api.example.com/users?x=1",
                headers={"Authorization": "Bearer t"},
                body=b'{"name":"Ada"}',
                timeout=5.0,
            )
        )

        assert seen == {
            "method": "POST",
            "url": "https://api.example.com/users?x=1",
            "auth": "Bearer t",
            "body": b'{"name":"Ada"}',
        }
        assert response.status == 201
        assert response.reason == "Created"
        assert response.content_type == "application/json"
        assert json.loads(response.content) == {"id": 7}

    @pytest.mark.asyncio
    async def test_timeout_maps_to_request_timeout_error(self):
        """httpx timeouts become RequestTimeoutError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = HttpxTransport(client=mock_client(handler))
        with pytest.raises(RequestTimeoutError) as exc_info:
            await transport.perform(
                RequestDescriptor(method="GET", url="https://x/a", timeout=1.0)
            )
        assert exc_info.value.timeout == 1.0

    @pytest.mark.asyncio
    async def test_connect_error_maps_to_network_error(self):
        """Other httpx errors become NetworkError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(client=mock_client(handler))
        with pytest.raises(NetworkError, match="connection refused"):
            await transport.perform(RequestDescriptor(method="GET", url="https://x/a"))

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self):
        """aclose does not close a client the caller owns."""
        client = mock_client(lambda request: httpx.Response(200))
        transport = HttpxTransport(client=client)
        await transport.aclose()
        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_created_and_closed(self):
        """A lazily created client is closed by aclose."""
        transport = HttpxTransport(max_connections=5)
        client = transport._ensure_client()
        assert transport._ensure_client() is client
        await transport.aclose()
        assert client.is_closed is True
