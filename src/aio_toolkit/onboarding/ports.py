"""Store interfaces the onboarding resolvers depend on.

The Adobe I/O Events managers in ``aio_toolkit.io_events`` implement these;
tests substitute in-memory fakes or mocks. Every method raises an exception
carrying a readable message on failure.
"""

from typing import Any, Protocol


class ProviderStore(Protocol):
    async def list(self) -> list[dict[str, Any]]: ...

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]: ...


class EventMetadataStore(Protocol):
    async def list(self, provider_id: str) -> list[dict[str, Any]]: ...

    async def create(self, provider_id: str, payload: dict[str, Any]) -> dict[str, Any]: ...


class RegistrationStore(Protocol):
    async def list(self) -> list[dict[str, Any]]: ...

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]: ...
