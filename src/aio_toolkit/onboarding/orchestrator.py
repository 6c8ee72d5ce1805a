"""Onboarding orchestrator: providers -> events -> registrations."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, model_validator

from aio_toolkit.config import Settings
from aio_toolkit.exceptions import ConfigurationError
from aio_toolkit.io_events.base import IO_EVENTS_BASE_URL, IOEventsCredentials
from aio_toolkit.io_events.client import IOEventsClient
from aio_toolkit.observability.logging import onboard_logger_name
from aio_toolkit.onboarding.events import CreateEvents
from aio_toolkit.onboarding.input_parser import InputParser
from aio_toolkit.onboarding.models import OnboardEventsInput, OnboardEventsResponse
from aio_toolkit.onboarding.ports import EventMetadataStore, ProviderStore, RegistrationStore
from aio_toolkit.onboarding.providers import CreateProviders
from aio_toolkit.onboarding.registrations import CreateRegistrations
from aio_toolkit.onboarding.summary import build_summary, log_summary

REQUIRED_FIELDS = (
    ("project_name", "Project name"),
    ("consumer_id", "Consumer ID"),
    ("project_id", "Project ID"),
    ("workspace_id", "Workspace ID"),
    ("api_key", "API key"),
    ("access_token", "Access token"),
)


class OnboardEventsConfig(BaseModel):
    """Identity and credentials for an onboarding run."""

    project_name: str = ""
    consumer_id: str = ""
    project_id: str = ""
    workspace_id: str = ""
    api_key: str = ""
    access_token: str = ""
    base_url: str = IO_EVENTS_BASE_URL
    timeout: float = 30.0

    @model_validator(mode="after")
    def check_required(self) -> "OnboardEventsConfig":
        for field_name, display in REQUIRED_FIELDS:
            if not getattr(self, field_name).strip():
                raise ConfigurationError(f"{display} is required")
        return self

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "OnboardEventsConfig":
        """
        Build a validated config from settings.

        Overrides set to None are ignored; the rest replace the matching
        settings value before validation runs.
        """
        values = {
            "project_name": settings.project_name,
            "consumer_id": settings.consumer_id,
            "project_id": settings.project_id,
            "workspace_id": settings.workspace_id,
            "api_key": settings.api_key,
            "access_token": settings.access_token,
            "base_url": settings.io_events_base_url,
            "timeout": settings.http_timeout,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def credentials(self) -> IOEventsCredentials:
        return IOEventsCredentials(
            client_id=self.api_key,
            consumer_id=self.consumer_id,
            project_id=self.project_id,
            workspace_id=self.workspace_id,
            access_token=self.access_token,
        )


class OnboardEvents:
    """
    Onboard providers, event metadata and registrations for a project.

    Stages run strictly one after another. Stores default to an
    IOEventsClient built from the config; pass them explicitly to use other
    backends or test doubles.

    Example:
        onboard = OnboardEvents(OnboardEventsConfig(project_name="Acme", ...))
        response = await onboard.process({"providers": [...]})
    """

    def __init__(
        self,
        config: OnboardEventsConfig,
        *,
        provider_store: ProviderStore | None = None,
        event_metadata_store: EventMetadataStore | None = None,
        registration_store: RegistrationStore | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            config: Validated onboarding configuration.
            provider_store: Provider store override.
            event_metadata_store: Event metadata store override.
            registration_store: Registration store override.
            logger: Logger override (defaults to a project-named logger).
        """
        if not isinstance(config, OnboardEventsConfig):
            raise ConfigurationError("OnboardEventsConfig is required")

        self.config = config
        self.logger = logger or logging.getLogger(onboard_logger_name(config.project_name))

        self._client: IOEventsClient | None = None
        if provider_store is None or event_metadata_store is None or registration_store is None:
            self._client = IOEventsClient(
                config.credentials(),
                base_url=config.base_url,
                timeout=config.timeout,
            )

        self.create_providers = CreateProviders(
            provider_store or self._client.providers, self.logger
        )
        self.create_events = CreateEvents(
            event_metadata_store or self._client.event_metadata, self.logger
        )
        self.create_registrations = CreateRegistrations(
            registration_store or self._client.registrations,
            config.api_key,
            self.logger,
        )

    def get_logger(self) -> logging.Logger | logging.LoggerAdapter:
        """Logger used by every stage of this orchestrator."""
        return self.logger

    async def close(self) -> None:
        """Close the HTTP client created for default stores, if any."""
        if self._client:
            await self._client.close()

    async def process(
        self,
        input_data: OnboardEventsInput | Mapping[str, Any],
    ) -> OnboardEventsResponse:
        """
        Run the onboarding pipeline.

        Listing failures for providers or registrations propagate and abort
        the run. Per-item failures are reported in the returned results.

        Args:
            input_data: Onboarding input tree (model or plain mapping).

        Returns:
            Provider, event and registration results.
        """
        entities = InputParser(input_data).get_entities()
        project_name = self.config.project_name

        self.logger.debug(
            f"[START] Processing onboard events for project: {project_name} "
            f"({self.config.project_id}) with {len(entities.providers)} providers"
        )

        provider_results = await self.create_providers.process(entities.providers, project_name)
        event_results = await self.create_events.process(
            entities.events, provider_results, project_name
        )
        registration_results = await self.create_registrations.process(
            entities.registrations, entities.events, provider_results, project_name
        )

        response = OnboardEventsResponse(
            created_providers=provider_results,
            created_events=event_results,
            created_registrations=registration_results,
        )
        log_summary(build_summary(response), self.logger)
        return response
