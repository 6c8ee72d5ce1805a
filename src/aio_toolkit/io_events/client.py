"""Single entry point bundling the Adobe I/O Events managers."""

from aio_toolkit.config import Settings
from aio_toolkit.integrations.rest_client import RestClient
from aio_toolkit.io_events.base import IO_EVENTS_BASE_URL, IOEventsCredentials
from aio_toolkit.io_events.event_metadata import EventMetadataManager
from aio_toolkit.io_events.providers import ProviderManager
from aio_toolkit.io_events.registrations import RegistrationManager


class IOEventsClient:
    """
    Adobe I/O Events API client.

    The three managers share one REST client, so ``close()`` releases every
    connection they opened.
    """

    def __init__(
        self,
        credentials: IOEventsCredentials,
        rest_client: RestClient | None = None,
        base_url: str = IO_EVENTS_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        self.credentials = credentials
        self.rest_client = rest_client or RestClient(timeout=timeout)
        self.providers = ProviderManager(credentials, self.rest_client, base_url)
        self.event_metadata = EventMetadataManager(credentials, self.rest_client, base_url)
        self.registrations = RegistrationManager(credentials, self.rest_client, base_url)

    @classmethod
    def from_settings(cls, settings: Settings) -> "IOEventsClient":
        """Build a client from environment settings."""
        credentials = IOEventsCredentials(
            client_id=settings.api_key,
            consumer_id=settings.consumer_id,
            project_id=settings.project_id,
            workspace_id=settings.workspace_id,
            access_token=settings.access_token,
        )
        return cls(
            credentials,
            base_url=settings.io_events_base_url,
            timeout=settings.http_timeout,
        )

    async def close(self) -> None:
        """Close the shared HTTP client."""
        await self.rest_client.close()
