"""Adobe I/O Events event metadata management."""

import base64
import json
import logging
import re
from typing import Any

from aio_toolkit.io_events.base import (
    DEFAULT_STATUS_MESSAGES,
    NOT_FOUND,
    IOEventsManager,
    validation_error,
)

logger = logging.getLogger(__name__)

MAX_FIELD_LENGTH = 255
MAX_TEMPLATE_BASE64_LENGTH = 87382

TEXT_PATTERN = re.compile(r"^[\w\s\-.(),:'`?#!]+$")
EVENT_CODE_PATTERN = re.compile(r"^[\w\-.]+$")


def encode_sample_event_template(template: Any) -> str:
    """
    Encode a sample event template the way the API stores it.

    Raises:
        IOEventsApiError: If the template is not a JSON object or is too large.
    """
    if not isinstance(template, dict):
        raise validation_error("sample_event_template must be a valid JSON object")

    try:
        encoded = base64.b64encode(json.dumps(template).encode("utf-8")).decode("ascii")
    except (TypeError, ValueError) as e:
        raise validation_error("sample_event_template must be a valid JSON object") from e

    if len(encoded) > MAX_TEMPLATE_BASE64_LENGTH:
        raise validation_error(
            "sample_event_template JSON object is too large when base64 encoded"
        )
    return encoded


def validate_event_metadata(payload: dict[str, Any]) -> None:
    """Check an event metadata payload before it is sent."""
    for field in ("description", "label", "event_code"):
        value = payload.get(field)
        if not isinstance(value, str) or not value.strip():
            raise validation_error(f"{field} is required and cannot be empty")
        if len(value) > MAX_FIELD_LENGTH:
            raise validation_error(f"{field} cannot exceed {MAX_FIELD_LENGTH} characters")

    for field in ("description", "label"):
        if not TEXT_PATTERN.match(payload[field]):
            raise validation_error(f"{field} contains invalid characters")

    if not EVENT_CODE_PATTERN.match(payload["event_code"]):
        raise validation_error("event_code contains invalid characters")


class EventMetadataManager(IOEventsManager):
    """
    Event metadata (event type descriptors) attached to a provider.

    Satisfies the onboarding ``EventMetadataStore`` interface through
    ``list(provider_id)`` and ``create(provider_id, payload)``.
    """

    resource = "event metadata"
    status_messages = {
        **DEFAULT_STATUS_MESSAGES,
        NOT_FOUND: "Not Found: Provider or event metadata does not exist",
    }

    def _metadata_url(self, provider_id: str) -> str:
        if not provider_id or not provider_id.strip():
            raise validation_error("provider_id is required and cannot be empty")
        return f"{self.workspace_url}/providers/{provider_id}/eventmetadata"

    async def list(self, provider_id: str) -> list[dict[str, Any]]:
        """List every event metadata entry registered for a provider."""
        return await self._list_all(self._metadata_url(provider_id), "eventmetadata")

    async def get(self, provider_id: str, event_code: str) -> dict[str, Any]:
        """Fetch one event metadata entry."""
        if not event_code or not event_code.strip():
            raise validation_error("event_code is required and cannot be empty")

        url = f"{self.base_url}/events/providers/{provider_id}/eventmetadata/{event_code}"
        response = await self._call("GET", url)
        return self._require_object(response, "event metadata")

    async def create(self, provider_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Create event metadata for a provider.

        The sample event template, when present, is sent base64-encoded.

        Args:
            provider_id: Owning provider id.
            payload: ``event_code``, ``label``, ``description`` and optional
                ``sample_event_template`` (a JSON object).

        Returns:
            The created event metadata record.
        """
        url = self._metadata_url(provider_id)
        validate_event_metadata(payload)

        body = {k: v for k, v in payload.items() if k != "sample_event_template"}
        if payload.get("sample_event_template") is not None:
            body["sample_event_template"] = encode_sample_event_template(
                payload["sample_event_template"]
            )

        response = await self._call("POST", url, body)
        logger.debug(f"Created event metadata {payload['event_code']} for provider {provider_id}")
        return self._require_object(response, "event metadata")

    async def delete(self, provider_id: str, event_code: str | None = None) -> None:
        """
        Delete event metadata.

        Deletes a single entry when ``event_code`` is given, otherwise every
        entry of the provider.
        """
        url = self._metadata_url(provider_id)
        if event_code:
            url = f"{url}/{event_code}"
        await self._call("DELETE", url)
