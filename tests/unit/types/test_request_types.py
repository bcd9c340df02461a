"""Tests for request, response and auth types."""

from request_client.types import (
    REFRESH_LEEWAY_SECONDS,
    AuthState,
    AuthToken,
    RequestDescriptor,
    RequestOptions,
    ResponseEnvelope,
    TransportResponse,
)


class TestRequestOptions:
    """Tests for RequestOptions."""

    def test_defaults(self):
        """Options default to a cacheable GET."""
        options = RequestOptions()
        assert options.method == "GET"
        assert options.headers is None
        assert options.data is None
        assert options.params is None
        assert options.cacheable is True

    def test_method_is_upper_cased(self):
        """Methods are normalized to upper case."""
        assert RequestOptions(method="post").method == "POST"

    def test_post_is_never_cacheable(self):
        """POST is not cacheable even when cache is requested."""
        assert RequestOptions(method="POST").cacheable is False
        assert RequestOptions(method="POST", cache=True).cacheable is False

    def test_cache_false_disables_caching(self):
        """cache=False opts a GET out of caching."""
        assert RequestOptions(cache=False).cacheable is False

    def test_other_methods_are_cacheable(self):
        """Only POST is excluded by method."""
        assert RequestOptions(method="PUT").cacheable is True


class TestRequestDescriptor:
    """Tests for RequestDescriptor."""

    def test_defaults(self):
        """Descriptor defaults are empty."""
        descriptor = RequestDescriptor(method="GET", url="https://x")
        assert descriptor.headers == {}
        assert descriptor.body is None
        assert descriptor.attempt == 0


class TestTransportResponse:
    """Tests for TransportResponse."""

    def test_headers_lower_cased(self):
        """Header names are normalized to lower case."""
        response = TransportResponse(200, headers={"Content-Type": "text/plain"})
        assert response.headers == {"content-type": "text/plain"}
        assert response.content_type == "text/plain"

    def test_ok_range(self):
        """Only 2xx statuses are ok."""
        assert TransportResponse(200).ok
        assert TransportResponse(299).ok
        assert not TransportResponse(199).ok
        assert not TransportResponse(300).ok
        assert not TransportResponse(500).ok


class TestResponseEnvelope:
    """Tests for ResponseEnvelope."""

    def test_as_cached_returns_tagged_copy(self):
        """as_cached leaves the original untouched."""
        original = ResponseEnvelope(200, "OK", {}, {"a": 1})
        cached = original.as_cached()
        assert cached.from_cache is True
        assert original.from_cache is False
        assert cached.data == original.data

    def test_to_dict(self):
        """to_dict exposes every field."""
        envelope = ResponseEnvelope(201, "Created", {"x": "1"}, [1, 2])
        assert envelope.to_dict() == {
            "status": 201,
            "status_text": "Created",
            "headers": {"x": "1"},
            "data": [1, 2],
            "from_cache": False,
        }


class TestAuthState:
    """Tests for AuthToken and AuthState."""

    def test_header_value(self):
        """Tokens render as '<scheme> <value>'."""
        assert AuthToken("abc").header_value() == "Bearer abc"
        assert AuthToken("dXNlcjpwdw==", scheme="Basic").header_value() == "Basic dXNlcjpwdw=="

    def test_authorization_header_absent_without_token(self):
        """No token means no header."""
        assert AuthState().authorization_header() is None

    def test_needs_refresh_requires_refresh_token(self):
        """Without a refresh token no refresh is due."""
        state = AuthState(token=AuthToken("a"), expires_at=0.0)
        assert state.needs_refresh(now=1000.0) is False

    def test_needs_refresh_within_leeway(self):
        """A refresh is due once expiry is within the leeway."""
        state = AuthState(refresh_token="r", expires_at=1000.0)
        assert state.needs_refresh(now=1000.0 - REFRESH_LEEWAY_SECONDS - 1) is False
        assert state.needs_refresh(now=1000.0 - REFRESH_LEEWAY_SECONDS) is True
        assert state.needs_refresh(now=2000.0) is True

    def test_clear(self):
        """clear removes every credential."""
        state = AuthState(token=AuthToken("a"), refresh_token="r", expires_at=1.0)
        state.clear()
        assert state == AuthState()
