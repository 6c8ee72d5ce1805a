"""Adobe I/O Events provider management."""

import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from aio_toolkit.exceptions import IOEventsApiError
from aio_toolkit.io_events.base import (
    CONFLICT,
    CONFLICTING_ID_HEADER,
    DEFAULT_STATUS_MESSAGES,
    FORBIDDEN,
    NOT_FOUND,
    IOEventsManager,
    validation_error,
)

logger = logging.getLogger(__name__)


class ProviderManager(IOEventsManager):
    """
    CRUD access to event providers of a consumer organization.

    Satisfies the onboarding ``ProviderStore`` interface through
    ``list()`` and ``create()``.
    """

    resource = "provider"
    status_messages = {
        **DEFAULT_STATUS_MESSAGES,
        FORBIDDEN: (
            "Forbidden: Insufficient permissions or invalid scopes, "
            "or attempt to create non multi-instance provider"
        ),
        NOT_FOUND: "Not Found: Provider or provider metadata does not exist",
        CONFLICT: "The event provider already exists",
    }

    async def list(
        self,
        provider_metadata_id: str | None = None,
        instance_id: str | None = None,
        provider_metadata_ids: list[str] | None = None,
        eventmetadata: bool | None = None,
    ) -> list[dict[str, Any]]:
        """
        List every provider of the consumer organization.

        Args:
            provider_metadata_id: Filter by provider metadata id.
            instance_id: Filter by instance id.
            provider_metadata_ids: Filter by several provider metadata ids.
            eventmetadata: Embed event metadata in each provider.

        Returns:
            Provider records across all pages.
        """
        if provider_metadata_id and provider_metadata_ids:
            raise validation_error(
                "Cannot specify both provider_metadata_id and provider_metadata_ids"
            )

        query: list[tuple[str, str]] = []
        if provider_metadata_id:
            query.append(("providerMetadataId", provider_metadata_id))
        if instance_id:
            query.append(("instanceId", instance_id))
        for metadata_id in provider_metadata_ids or []:
            query.append(("providerMetadataIds", metadata_id))
        if eventmetadata is not None:
            query.append(("eventmetadata", str(eventmetadata).lower()))

        url = f"{self.base_url}/events/{self.credentials.consumer_id}/providers"
        if query:
            url = f"{url}?{urlencode(query)}"

        return await self._list_all(url, "providers")

    async def get(self, provider_id: str, eventmetadata: bool = False) -> dict[str, Any]:
        """Fetch one provider by id."""
        if not provider_id or not provider_id.strip():
            raise validation_error("provider_id is required")

        url = f"{self.base_url}/events/providers/{provider_id}"
        if eventmetadata:
            url = f"{url}?eventmetadata=true"

        response = await self._call("GET", url)
        return self._require_object(response, "provider")

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Create a provider in the configured workspace.

        Args:
            payload: Provider input (``label`` required; ``description``,
                ``docs_url``, ``provider_metadata``, ``instance_id`` optional).

        Returns:
            The created provider record.
        """
        if not payload:
            raise validation_error("provider payload is required")
        if not str(payload.get("label") or "").strip():
            raise validation_error("label is required in provider payload")

        response = await self._call("POST", f"{self.workspace_url}/providers", payload)
        provider = self._require_object(response, "provider")
        if not provider.get("id"):
            raise validation_error("Invalid response format: Missing provider id")

        logger.debug(f"Created provider {provider['id']} ({payload['label']})")
        return provider

    async def delete(self, provider_id: str) -> None:
        """Delete a provider by id."""
        if not provider_id or not provider_id.strip():
            raise validation_error("provider_id is required")

        await self._call("DELETE", f"{self.workspace_url}/providers/{provider_id}")

    def _status_error(self, response: httpx.Response) -> IOEventsApiError:
        conflicting_id = response.headers.get(CONFLICTING_ID_HEADER)
        if response.status_code == CONFLICT and conflicting_id:
            return IOEventsApiError(
                f"Provider already exists with conflicting ID: {conflicting_id}",
                CONFLICT,
                "CONFLICT_ERROR",
                f"Conflicting provider ID: {conflicting_id}",
            )
        return super()._status_error(response)
