"""Unit tests for the Redis infinite loop breaker."""

import hashlib
from unittest.mock import AsyncMock

import pytest

from aio_toolkit.integrations.infinite_loop_breaker import (
    DEFAULT_TTL,
    InfiniteLoopBreaker,
    InfiniteLoopData,
    fingerprint,
)

PRODUCT = {"sku": "SKU-1", "price": 10}


class TestFingerprint:
    """Tests for fingerprint generation."""

    def test_sha256_of_compact_json(self) -> None:
        """Test the digest covers the compact JSON encoding."""
        expected = hashlib.sha256(b'{"sku":"SKU-1","price":10}').hexdigest()

        assert fingerprint(PRODUCT) == expected

    def test_different_data_differs(self) -> None:
        assert fingerprint(PRODUCT) != fingerprint({**PRODUCT, "price": 11})


class TestInfiniteLoopBreaker:
    """Tests for InfiniteLoopBreaker."""

    @pytest.fixture
    def mock_redis(self):
        """Create a mock Redis client."""
        return AsyncMock()

    @pytest.fixture
    def breaker(self, mock_redis):
        return InfiniteLoopBreaker(redis_client=mock_redis)

    def _data(self, **overrides) -> InfiniteLoopData:
        values = {
            "key": "product:SKU-1",
            "fingerprint": PRODUCT,
            "event_types": ["product.updated", "product.created"],
            "event": "product.updated",
        }
        values.update(overrides)
        return InfiniteLoopData(**values)

    @pytest.mark.asyncio
    async def test_unwatched_event(self, breaker, mock_redis) -> None:
        """Test events outside the watched types are never loops."""
        result = await breaker.is_infinite_loop(self._data(event="order.placed"))

        assert result is False
        mock_redis.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_stored_fingerprint(self, breaker, mock_redis) -> None:
        mock_redis.get.return_value = None

        assert await breaker.is_infinite_loop(self._data()) is False
        mock_redis.get.assert_awaited_once_with("product:SKU-1")

    @pytest.mark.asyncio
    async def test_matching_fingerprint(self, breaker, mock_redis) -> None:
        """Test a stored fingerprint of the same data signals a loop."""
        mock_redis.get.return_value = fingerprint(PRODUCT).encode("utf-8")

        assert await breaker.is_infinite_loop(self._data()) is True

    @pytest.mark.asyncio
    async def test_changed_data(self, breaker, mock_redis) -> None:
        """Test a different payload under the same key is not a loop."""
        mock_redis.get.return_value = fingerprint(PRODUCT)

        result = await breaker.is_infinite_loop(self._data(fingerprint={**PRODUCT, "price": 12}))

        assert result is False

    @pytest.mark.asyncio
    async def test_callable_key_and_fingerprint(self, breaker, mock_redis) -> None:
        """Test producers built with the fn_ helpers are resolved."""
        mock_redis.get.return_value = fingerprint(PRODUCT)

        result = await breaker.is_infinite_loop(self._data(
            key=InfiniteLoopBreaker.fn_infinite_loop_key("product:SKU-1"),
            fingerprint=InfiniteLoopBreaker.fn_fingerprint(PRODUCT),
        ))

        assert result is True
        mock_redis.get.assert_awaited_once_with("product:SKU-1")

    @pytest.mark.asyncio
    async def test_store_uses_default_ttl(self, breaker, mock_redis) -> None:
        await breaker.store_fingerprint("product:SKU-1", PRODUCT)

        mock_redis.setex.assert_awaited_once_with(
            "product:SKU-1", DEFAULT_TTL, fingerprint(PRODUCT)
        )

    @pytest.mark.asyncio
    async def test_store_with_ttl_and_producers(self, breaker, mock_redis) -> None:
        await breaker.store_fingerprint(
            InfiniteLoopBreaker.fn_infinite_loop_key("k"),
            InfiniteLoopBreaker.fn_fingerprint(PRODUCT),
            ttl=300,
        )

        mock_redis.setex.assert_awaited_once_with("k", 300, fingerprint(PRODUCT))

    @pytest.mark.asyncio
    async def test_store_then_detect(self, mock_redis) -> None:
        """Test a stored fingerprint is recognised on the echoed event."""
        store: dict[str, str] = {}
        mock_redis.setex.side_effect = lambda key, ttl, value: store.__setitem__(key, value)
        mock_redis.get.side_effect = lambda key: store.get(key)
        breaker = InfiniteLoopBreaker(mock_redis)

        await breaker.store_fingerprint("product:SKU-1", PRODUCT)

        assert await breaker.is_infinite_loop(self._data()) is True
        assert await breaker.is_infinite_loop(self._data(key="product:SKU-2")) is False

    def test_fn_helpers(self) -> None:
        assert InfiniteLoopBreaker.fn_fingerprint(PRODUCT)() is PRODUCT
        assert InfiniteLoopBreaker.fn_infinite_loop_key("k")() == "k"
