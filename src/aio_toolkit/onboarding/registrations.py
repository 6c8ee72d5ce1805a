"""Idempotent creation of webhook / journal registrations."""

import json
import logging
from typing import Any

from aio_toolkit.exceptions import OnboardingError
from aio_toolkit.onboarding.models import (
    ParsedEvent,
    ParsedRegistration,
    ProviderResult,
    RegistrationInfo,
    RegistrationResult,
)
from aio_toolkit.onboarding.ports import RegistrationStore
from aio_toolkit.onboarding.providers import DEFAULT_PROJECT_NAME

DEFAULT_DELIVERY_TYPE = "webhook"


def group_events_by_provider(events: list[ParsedEvent]) -> dict[str, list[ParsedEvent]]:
    """Group events by their provider_key value, keeping first-seen order."""
    grouped: dict[str, list[ParsedEvent]] = {}
    for event in events:
        grouped.setdefault(event.provider_key, []).append(event)
    return grouped


class CreateRegistrations:
    """
    Create one registration per (registration, provider) pair.

    Event groups are keyed by each event's ``provider_key`` value and matched
    to provider results by ``original_label``, so the grouping value must equal
    the provider's label for a registration to be created.
    """

    def __init__(
        self,
        store: RegistrationStore,
        client_id: str,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        """
        Initialize the registration resolver.

        Args:
            store: Registration store (list + create).
            client_id: Adobe I/O client id the registrations belong to.
            logger: Logger shared across the onboarding run.
        """
        self.store = store
        self.client_id = client_id
        self.logger = logger or logging.getLogger(__name__)

    async def process(
        self,
        registrations: list[ParsedRegistration],
        events: list[ParsedEvent],
        provider_results: list[ProviderResult],
        project_name: str = DEFAULT_PROJECT_NAME,
    ) -> list[RegistrationResult]:
        """
        Resolve every desired registration.

        Args:
            registrations: Parsed registrations.
            events: Parsed events.
            provider_results: Output of the provider stage.
            project_name: Project name (logging only).

        Returns:
            Registration results in registration then provider-group order.
        """
        self.logger.debug(f"[INFO] Creating registrations for project: {project_name}")
        self.logger.debug(
            f"[PROCESSING] Processing {len(registrations)} registration(s) with "
            f"{len(events)} event(s) across {len(provider_results)} provider(s)..."
        )

        if not registrations:
            self.logger.debug("[SKIP] No registrations to process.")
            return []

        if not events:
            self.logger.debug("[SKIP] No events to process.")
            return []

        if not provider_results:
            self.logger.debug("[SKIP] No provider results to process.")
            return []

        existing = await self.fetch_registrations()

        results = []
        for registration in registrations:
            self.logger.debug(f"[PROCESSING] Processing registration: {registration.label}")

            registration_events = [e for e in events if e.registration_key == registration.key]
            if not registration_events:
                self.logger.debug(f"[SKIP] No events found for registration: {registration.label}")
                continue

            self.logger.debug(
                f"[INFO] Found {len(registration_events)} event(s) for this registration"
            )

            for provider_label, provider_events in group_events_by_provider(
                registration_events
            ).items():
                provider = next(
                    (p for p in provider_results if p.provider.original_label == provider_label),
                    None,
                )
                if provider is None or not provider.provider.id:
                    self.logger.debug(
                        f"[SKIP] Provider not found or missing ID for: {provider_label}"
                    )
                    continue

                results.append(
                    await self.create_registration(
                        registration, provider_events, provider, existing
                    )
                )

        return results

    async def fetch_registrations(self) -> dict[str, dict[str, Any]]:
        """Fetch existing registrations indexed by name."""
        self.logger.debug("[INFO] Fetching existing registrations...")

        try:
            registration_list = await self.store.list()
        except Exception as e:
            self.logger.error(f"[ERROR] Failed to fetch existing registrations: {e}")
            raise

        existing = {registration.get("name"): registration for registration in registration_list}
        self.logger.debug(f"[INFO] Found {len(existing)} existing registrations")
        return existing

    def prepare_payload(
        self,
        registration: ParsedRegistration,
        events: list[ParsedEvent],
        provider: ProviderResult,
        name: str,
    ) -> dict[str, Any]:
        """Build the creation payload; delivery settings come from the first event."""
        first_event = events[0]
        payload: dict[str, Any] = {
            "client_id": self.client_id,
            "name": name,
            "description": registration.description or name,
            "delivery_type": first_event.delivery_type or DEFAULT_DELIVERY_TYPE,
            "events_of_interest": [
                {"provider_id": provider.provider.id or "", "event_code": event.event_code}
                for event in events
            ],
        }
        if first_event.runtime_action:
            payload["runtime_action"] = first_event.runtime_action
        return payload

    async def create_registration(
        self,
        registration: ParsedRegistration,
        events: list[ParsedEvent],
        provider: ProviderResult,
        existing: dict[str, dict[str, Any]],
    ) -> RegistrationResult:
        if not events:
            raise OnboardingError("No events provided for registration creation")

        name = registration.label
        self.logger.debug(
            f"[PROCESSING] Processing registration: {registration.label} "
            f"for provider: {provider.provider.original_label}"
        )

        remote = existing.get(name)
        if remote:
            self.logger.debug("[SKIP] Registration already exists - skipping creation")
            self.logger.debug(f"[INFO] Existing ID: {remote.get('id')}")
            return RegistrationResult(
                created=False,
                skipped=True,
                registration=RegistrationInfo(
                    id=remote.get("id"),
                    key=registration.key,
                    label=registration.label,
                    original_label=registration.label,
                    name=name,
                    description=registration.description,
                ),
                provider=provider.provider,
                reason="Already exists",
                raw=remote,
            )

        self.logger.debug("[CREATE] Creating new registration...")
        first_event = events[0]
        try:
            payload = self.prepare_payload(registration, events, provider, name)
            self.logger.debug(f"[INFO] Registration input: {json.dumps(payload, indent=2)}")

            created = await self.store.create(payload)

            self.logger.debug("[SUCCESS] Registration created successfully!")
            self.logger.debug(f"[INFO] New ID: {created.get('id')}")
            return RegistrationResult(
                created=True,
                skipped=False,
                registration=RegistrationInfo(
                    id=created.get("id"),
                    key=registration.key,
                    label=registration.label,
                    original_label=registration.label,
                    name=created.get("name") or name,
                    description=registration.description,
                    client_id=self.client_id,
                    webhook_url=created.get("webhook_url"),
                    delivery_type=payload["delivery_type"],
                    runtime_action=payload.get("runtime_action"),
                ),
                provider=provider.provider,
                raw=created,
            )
        except Exception as e:
            self.logger.error(f"[ERROR] Failed to create registration \"{name}\": {e}")
            return RegistrationResult(
                created=False,
                skipped=False,
                error=str(e),
                registration=RegistrationInfo(
                    key=registration.key,
                    label=registration.label,
                    original_label=registration.label,
                    name=name,
                    description=registration.description,
                    delivery_type=first_event.delivery_type or DEFAULT_DELIVERY_TYPE,
                    runtime_action=first_event.runtime_action or None,
                ),
                provider=provider.provider,
            )
