"""Adobe I/O Events registration management."""

import logging
from typing import Any
from urllib.parse import urlencode

from aio_toolkit.io_events.base import (
    BAD_REQUEST,
    CONFLICT,
    DEFAULT_STATUS_MESSAGES,
    FORBIDDEN,
    UNAUTHORIZED,
    IOEventsManager,
    validation_error,
)

logger = logging.getLogger(__name__)

DELIVERY_TYPES = ("webhook", "webhook_batch", "journal", "aws_eventbridge")


def validate_registration(payload: dict[str, Any]) -> None:
    """Check a registration payload before it is sent."""
    if not payload:
        raise validation_error("Registration data is required")

    client_id = str(payload.get("client_id") or "")
    if not client_id.strip():
        raise validation_error("Client ID is required")
    if not 3 <= len(client_id) <= 255:
        raise validation_error("Client ID must be between 3 and 255 characters")

    name = str(payload.get("name") or "")
    if not name.strip():
        raise validation_error("Registration name is required")
    if not 3 <= len(name) <= 255:
        raise validation_error("Registration name must be between 3 and 255 characters")

    if len(payload.get("description") or "") > 5000:
        raise validation_error("Description must not exceed 5000 characters")
    if len(payload.get("webhook_url") or "") > 4000:
        raise validation_error("Webhook URL must not exceed 4000 characters")

    events_of_interest = payload.get("events_of_interest")
    if not isinstance(events_of_interest, list):
        raise validation_error("Events of interest is required and must be an array")
    if not events_of_interest:
        raise validation_error("At least one event of interest is required")
    for index, event in enumerate(events_of_interest):
        if not str(event.get("provider_id") or "").strip():
            raise validation_error(f"Provider ID is required for event at index {index}")
        if not str(event.get("event_code") or "").strip():
            raise validation_error(f"Event code is required for event at index {index}")

    delivery_type = payload.get("delivery_type")
    if not delivery_type:
        raise validation_error("Delivery type is required")
    if delivery_type not in DELIVERY_TYPES:
        raise validation_error(f"Delivery type must be one of: {', '.join(DELIVERY_TYPES)}")

    if len(payload.get("runtime_action") or "") > 255:
        raise validation_error("Runtime action must not exceed 255 characters")


class RegistrationManager(IOEventsManager):
    """
    Webhook / journal registrations of a workspace.

    Satisfies the onboarding ``RegistrationStore`` interface through
    ``list()`` and ``create()``.
    """

    resource = "registration"
    status_messages = {
        **DEFAULT_STATUS_MESSAGES,
        BAD_REQUEST: "Bad request: Invalid registration data provided",
        UNAUTHORIZED: "Unauthorized: Invalid or missing authentication",
        FORBIDDEN: "Forbidden: Insufficient permissions",
        CONFLICT: "Conflict: Registration with this name already exists",
        422: "Unprocessable entity: Invalid registration data",
    }

    @property
    def registrations_url(self) -> str:
        return f"{self.workspace_url}/registrations"

    async def list(self, **query: str) -> list[dict[str, Any]]:
        """List every registration in the workspace."""
        url = self.registrations_url
        params = {k: v for k, v in query.items() if v is not None}
        if params:
            url = f"{url}?{urlencode(params)}"
        return await self._list_all(url, "registrations")

    async def get(self, registration_id: str) -> dict[str, Any]:
        """Fetch one registration by id."""
        if not registration_id or not registration_id.strip():
            raise validation_error("registration_id is required")

        response = await self._call("GET", f"{self.registrations_url}/{registration_id}")
        return self._require_object(response, "registration")

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Create a registration.

        Args:
            payload: ``client_id``, ``name``, ``description``,
                ``delivery_type``, ``events_of_interest`` and optional
                ``runtime_action`` / ``webhook_url``.

        Returns:
            The created registration record.
        """
        validate_registration(payload)

        response = await self._call("POST", self.registrations_url, payload)
        registration = self._require_object(response, "registration")
        logger.debug(f"Created registration {registration.get('id')} ({payload['name']})")
        return registration

    async def delete(self, registration_id: str) -> None:
        """Delete a registration by id."""
        if not registration_id or not registration_id.strip():
            raise validation_error("registration_id is required")

        await self._call("DELETE", f"{self.registrations_url}/{registration_id}")
