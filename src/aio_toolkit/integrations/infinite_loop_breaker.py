"""Redis-backed detection of event processing loops."""

import hashlib
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import redis.asyncio as redis

logger = logging.getLogger(__name__)

DEFAULT_TTL = 60  # seconds


def fingerprint(data: Any) -> str:
    """SHA-256 hex digest of the compact JSON form of ``data``."""
    serialized = json.dumps(data, separators=(",", ":"), default=str)
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


def _resolve(value: Any) -> Any:
    return value() if callable(value) else value


@dataclass
class InfiniteLoopData:
    """
    What to check for a potential loop.

    ``key`` and ``fingerprint`` may be plain values or zero-argument
    callables producing them.
    """

    key: str | Callable[[], str]
    fingerprint: Any
    event_types: list[str]
    event: str


class InfiniteLoopBreaker:
    """
    Detect events that echo back a change this integration just made.

    Before sending data out, store a fingerprint of it under a key. When an
    event of a watched type later arrives carrying the same data under the
    same key, ``is_infinite_loop`` reports it so the handler can stop.

    Redis keys expire after the TTL, so an identical change made later is
    processed normally.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        default_ttl: int = DEFAULT_TTL,
    ) -> None:
        """
        Initialize the loop breaker.

        Args:
            redis_client: Async Redis client holding the fingerprints.
            default_ttl: Fingerprint lifetime in seconds.
        """
        self.redis = redis_client
        self.default_ttl = default_ttl

    async def is_infinite_loop(self, data: InfiniteLoopData) -> bool:
        """
        Check whether an incoming event matches a stored fingerprint.

        Args:
            data: Key, fingerprint data, watched event types and the event.

        Returns:
            True if the event is a watched type and its fingerprint matches.
        """
        logger.debug(f"Checking for potential infinite loop for event: {data.event}")

        if data.event not in data.event_types:
            logger.debug(f"Event type {data.event} is not in the infinite loop event types list")
            return False

        key = _resolve(data.key)
        persisted = await self.redis.get(key)
        if not persisted:
            logger.debug(f"No persisted fingerprint found for key {key}")
            return False

        if isinstance(persisted, bytes):
            persisted = persisted.decode("utf-8")

        generated = fingerprint(_resolve(data.fingerprint))
        logger.debug(
            f"Persisted fingerprint found for key {key}: {persisted}, "
            f"Generated fingerprint: {generated}"
        )
        return persisted == generated

    async def store_fingerprint(
        self,
        key: str | Callable[[], str],
        data: Any,
        ttl: int | None = None,
    ) -> None:
        """Store the fingerprint of ``data`` under ``key`` for ``ttl`` seconds."""
        await self.redis.setex(
            _resolve(key),
            ttl or self.default_ttl,
            fingerprint(_resolve(data)),
        )

    @staticmethod
    def fn_fingerprint(obj: Any) -> Callable[[], Any]:
        """Wrap event data as a fingerprint producer."""
        return lambda: obj

    @staticmethod
    def fn_infinite_loop_key(key: Any) -> Callable[[], Any]:
        """Wrap a key as a key producer."""
        return lambda: key
