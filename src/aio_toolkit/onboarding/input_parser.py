"""Flattens the onboarding input tree into cross-referenced entities."""

from collections.abc import Mapping
from typing import Any

from aio_toolkit.onboarding.models import (
    OnboardEvent,
    OnboardEventsInput,
    OnboardProvider,
    OnboardRegistration,
    ParsedEntities,
    ParsedEvent,
    ParsedProvider,
    ParsedRegistration,
)


class InputParser:
    """
    Parse providers -> registrations -> events into three flat lists.

    Input document order is preserved. Keys are passed through untouched:
    duplicates, blanks and nulls are not rejected here. Null text fields and
    null child lists become empty.
    """

    def __init__(self, input_data: OnboardEventsInput | Mapping[str, Any]) -> None:
        if not isinstance(input_data, OnboardEventsInput):
            input_data = OnboardEventsInput.model_validate(input_data)

        self.entities = ParsedEntities()

        for provider in input_data.providers or []:
            self.entities.providers.append(self._provider_entity(provider))

            for registration in provider.registrations or []:
                self.entities.registrations.append(
                    self._registration_entity(registration, provider.key)
                )

                for event in registration.events or []:
                    self.entities.events.append(
                        self._event_entity(event, registration.key, provider.key)
                    )

    @staticmethod
    def _provider_entity(provider: OnboardProvider) -> ParsedProvider:
        return ParsedProvider(
            key=provider.key,
            label=provider.label,
            description=provider.description or "",
            docs_url=provider.docs_url,
        )

    @staticmethod
    def _registration_entity(
        registration: OnboardRegistration,
        provider_key: str,
    ) -> ParsedRegistration:
        return ParsedRegistration(
            key=registration.key,
            label=registration.label,
            description=registration.description or "",
            provider_key=provider_key,
        )

    @staticmethod
    def _event_entity(
        event: OnboardEvent,
        registration_key: str,
        provider_key: str,
    ) -> ParsedEvent:
        return ParsedEvent(
            event_code=event.event_code,
            runtime_action=event.runtime_action or "",
            delivery_type=event.delivery_type or "",
            sample_event_template=event.sample_event_template,
            registration_key=registration_key,
            provider_key=provider_key,
        )

    def get_entities(self) -> ParsedEntities:
        return self.entities


def parse(input_data: OnboardEventsInput | Mapping[str, Any]) -> ParsedEntities:
    """Parse an onboarding input tree (model or plain mapping)."""
    return InputParser(input_data).get_entities()
