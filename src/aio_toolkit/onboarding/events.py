"""Idempotent creation of event metadata for resolved providers."""

import logging
from typing import Any

from aio_toolkit.onboarding.models import EventInfo, EventResult, ParsedEvent, ProviderResult
from aio_toolkit.onboarding.ports import EventMetadataStore
from aio_toolkit.onboarding.providers import DEFAULT_PROJECT_NAME


class CreateEvents:
    """
    Create event metadata per provider, skipping event codes already registered.

    Providers without an id (failed creations) are skipped. A failure listing
    one provider's metadata is logged and treated as "no existing events".
    """

    def __init__(
        self,
        store: EventMetadataStore,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    async def process(
        self,
        events: list[ParsedEvent],
        provider_results: list[ProviderResult],
        project_name: str = DEFAULT_PROJECT_NAME,
    ) -> list[EventResult]:
        """
        Resolve parsed events against each provider's existing metadata.

        Args:
            events: All parsed events.
            provider_results: Output of the provider stage.
            project_name: Project name (logging only).

        Returns:
            Event results grouped by provider, in provider then input order.
        """
        self.logger.debug(f"[CREATE] Creating events for project: {project_name}")
        self.logger.debug(
            f"[INFO] Processing {len(events)} event(s) across "
            f"{len(provider_results)} provider(s)..."
        )

        if not events:
            self.logger.debug("[INFO] No events to process.")
            return []

        if not provider_results:
            self.logger.debug("[INFO] No provider results to process.")
            return []

        results = []
        for provider_result in provider_results:
            provider = provider_result.provider
            if not provider.id:
                self.logger.warning(
                    f"[WARN] Skipping provider without ID: {provider.original_label}"
                )
                continue

            self.logger.debug(f"[INFO] Processing events for provider: {provider.original_label}")
            existing = await self.fetch_metadata(provider.id)

            provider_events = [e for e in events if e.provider_key == provider.key]
            if not provider_events:
                self.logger.debug(
                    f"[INFO] No events found for provider: {provider.original_label}"
                )
                continue

            self.logger.debug(f"[INFO] Found {len(provider_events)} event(s) for this provider")
            for event in provider_events:
                result = await self.create_event(provider.id, event, existing)
                result.provider = provider
                results.append(result)

        return results

    async def fetch_metadata(self, provider_id: str) -> list[dict[str, Any]]:
        """List existing metadata for a provider; failures yield an empty list."""
        self.logger.debug(f"[INFO] Fetching existing event metadata for provider: {provider_id}")

        try:
            existing = await self.store.list(provider_id)
        except Exception as e:
            self.logger.error(
                f"[ERROR] Error fetching existing metadata for provider {provider_id}: {e}"
            )
            return []

        self.logger.debug(f"[INFO] Found {len(existing)} existing event metadata entries")
        return existing

    async def create_event(
        self,
        provider_id: str,
        event: ParsedEvent,
        existing: list[dict[str, Any]],
    ) -> EventResult:
        event_code = event.event_code
        self.logger.debug(f"[INFO] Processing event: {event_code}")

        if any(metadata.get("event_code") == event_code for metadata in existing):
            self.logger.debug(
                f"[SKIP] Event metadata already exists for: {event_code} - skipping"
            )
            return EventResult(
                created=False,
                skipped=True,
                event=EventInfo(event_code=event_code),
                reason="Already exists",
            )

        payload: dict[str, Any] = {
            "event_code": event_code,
            "label": event_code,
            "description": event_code,
        }
        if event.sample_event_template:
            payload["sample_event_template"] = event.sample_event_template

        try:
            self.logger.debug(f"[CREATE] Creating event metadata: {event_code}")
            created = await self.store.create(provider_id, payload)
            if not created:
                raise ValueError("Event metadata creation returned no result")

            self.logger.debug(f"[SUCCESS] Event metadata created successfully: {event_code}")
            return EventResult(
                created=True,
                skipped=False,
                event=EventInfo(
                    id=created.get("id") or created.get("event_code") or event_code,
                    event_code=event_code,
                    label=payload["label"],
                    description=payload["description"],
                    sample_event_template=payload.get("sample_event_template"),
                ),
                raw=created,
            )
        except Exception as e:
            self.logger.error(f"[ERROR] Error creating event metadata for {event_code}: {e}")
            return EventResult(
                created=False,
                skipped=False,
                event=EventInfo(event_code=event_code),
                error=str(e),
            )
