"""Tests for interceptor chains."""

import pytest

from request_client.interceptors import FunctionInterceptor, InterceptorChain, as_interceptor
from request_client.protocols import InterceptorProtocol


class AppendInterceptor:
    """Object-style interceptor appending a marker to a list."""

    def __init__(self, marker):
        self.marker = marker

    def transform(self, value):
        return [*value, self.marker]


class TestAsInterceptor:
    """Tests for interceptor normalization."""

    def test_protocol_object_returned_unchanged(self):
        """Objects with transform() are used as-is."""
        interceptor = AppendInterceptor("a")
        assert isinstance(interceptor, InterceptorProtocol)
        assert as_interceptor(interceptor) is interceptor

    def test_callable_is_wrapped(self):
        """Plain callables are wrapped in FunctionInterceptor."""

        def func(value):
            return value

        wrapped = as_interceptor(func)
        assert isinstance(wrapped, FunctionInterceptor)
        assert wrapped.func is func

    def test_non_callable_rejected(self):
        """Objects that are neither callable nor interceptors are rejected."""
        with pytest.raises(TypeError, match="Interceptor must be callable"):
            as_interceptor(42)


class TestInterceptorChain:
    """Tests for InterceptorChain.run and registration."""

    @pytest.mark.asyncio
    async def test_empty_chain_is_identity(self):
        """An empty chain returns its input."""
        chain = InterceptorChain("request")
        value = object()
        assert await chain.run(value) is value

    @pytest.mark.asyncio
    async def test_runs_in_registration_order(self):
        """Each interceptor receives the previous one's output."""
        chain = InterceptorChain("request")
        chain.add(lambda v: [*v, 1])
        chain.add(AppendInterceptor(2))
        chain.add(lambda v: [*v, 3])
        assert await chain.run([]) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_mixes_sync_and_async(self):
        """Async interceptors are awaited before the next one runs."""
        chain = InterceptorChain("response")

        async def double(value):
            return value * 2

        chain.add(double)
        chain.add(lambda v: v + 1)
        chain.add(double)
        assert await chain.run(1) == 6

    @pytest.mark.asyncio
    async def test_exception_stops_fold(self):
        """A raising interceptor stops the chain and propagates."""
        chain = InterceptorChain("request")
        calls = []

        def boom(value):
            raise RuntimeError("interceptor failed")

        chain.add(boom)
        chain.add(lambda v: calls.append(v))

        with pytest.raises(RuntimeError, match="interceptor failed"):
            await chain.run("x")
        assert calls == []

    def test_remove_by_original_callable(self):
        """Wrapped callables can be removed by the original function."""
        chain = InterceptorChain("error")

        def handler(error):
            return error

        chain.add(handler)
        assert len(chain) == 1
        assert chain.remove(handler) is True
        assert len(chain) == 0
        assert chain.remove(handler) is False

    def test_remove_by_registered_object(self):
        """The object returned by add can be used to remove."""
        chain = InterceptorChain("request")
        registered = chain.add(lambda v: v)
        assert chain.remove(registered) is True

    def test_clear_and_iter(self):
        """clear empties the chain; iteration yields registered interceptors."""
        chain = InterceptorChain("request")
        first = chain.add(AppendInterceptor("a"))
        second = chain.add(AppendInterceptor("b"))
        assert list(chain) == [first, second]
        chain.clear()
        assert list(chain) == []
