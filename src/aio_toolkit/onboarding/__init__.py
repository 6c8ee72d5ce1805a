"""Onboarding pipeline for Adobe I/O Events providers, events and registrations."""

from aio_toolkit.onboarding.events import CreateEvents
from aio_toolkit.onboarding.input_parser import InputParser, parse
from aio_toolkit.onboarding.models import (
    EventResult,
    OnboardEventsInput,
    OnboardEventsResponse,
    OnboardEventsSummary,
    ParsedEntities,
    ProviderResult,
    RegistrationResult,
)
from aio_toolkit.onboarding.orchestrator import OnboardEvents, OnboardEventsConfig
from aio_toolkit.onboarding.providers import CreateProviders
from aio_toolkit.onboarding.registrations import CreateRegistrations
from aio_toolkit.onboarding.summary import build_summary, log_summary

__all__ = [
    # Orchestrator
    "OnboardEvents",
    "OnboardEventsConfig",
    # Stages
    "InputParser",
    "parse",
    "CreateProviders",
    "CreateEvents",
    "CreateRegistrations",
    # Summary
    "build_summary",
    "log_summary",
    # Models
    "OnboardEventsInput",
    "OnboardEventsResponse",
    "OnboardEventsSummary",
    "ParsedEntities",
    "ProviderResult",
    "EventResult",
    "RegistrationResult",
]
