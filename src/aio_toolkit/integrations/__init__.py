"""HTTP, token and loop detection helpers for Adobe integrations."""

from aio_toolkit.integrations.bearer_token import BearerToken, BearerTokenInfo
from aio_toolkit.integrations.infinite_loop_breaker import (
    InfiniteLoopBreaker,
    InfiniteLoopData,
)
from aio_toolkit.integrations.rest_client import RestClient

__all__ = [
    "BearerToken",
    "BearerTokenInfo",
    "InfiniteLoopBreaker",
    "InfiniteLoopData",
    "RestClient",
]
