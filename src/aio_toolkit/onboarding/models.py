"""Data models for the onboarding pipeline."""

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from aio_toolkit.exceptions import OnboardingError

ResultStatus = Literal["created", "existing", "failed"]


# =============================================================================
# Input tree
# =============================================================================


class OnboardEvent(BaseModel):
    """Event configuration for onboarding."""

    model_config = ConfigDict(populate_by_name=True)

    event_code: Any = Field(default=None, alias="eventCode")
    runtime_action: str | None = Field(default=None, alias="runtimeAction")
    delivery_type: str | None = Field(default=None, alias="deliveryType")
    sample_event_template: Any = Field(default=None, alias="sampleEventTemplate")


class OnboardRegistration(BaseModel):
    """Registration configuration for onboarding."""

    model_config = ConfigDict(populate_by_name=True)

    key: Any = None
    label: Any = None
    description: str | None = None
    events: list[OnboardEvent] | None = Field(default_factory=list)


class OnboardProvider(BaseModel):
    """Provider configuration for onboarding."""

    model_config = ConfigDict(populate_by_name=True)

    key: Any = None
    label: Any = None
    description: str | None = None
    docs_url: str | None = Field(default=None, alias="docsUrl")
    registrations: list[OnboardRegistration] | None = Field(default_factory=list)


class OnboardEventsInput(BaseModel):
    """
    Complete onboarding input: providers -> registrations -> events.

    Only the tree shape is enforced. Keys, labels and event codes are passed
    through unchecked and optional text fields may be null.
    """

    providers: list[OnboardProvider] | None = Field(default_factory=list)


# =============================================================================
# Parsed entities
# =============================================================================


@dataclass(frozen=True)
class ParsedProvider:
    key: Any
    label: Any
    description: str
    docs_url: str | None


@dataclass(frozen=True)
class ParsedRegistration:
    key: Any
    label: Any
    description: str
    provider_key: Any


@dataclass(frozen=True)
class ParsedEvent:
    event_code: Any
    runtime_action: str
    delivery_type: str
    sample_event_template: Any
    registration_key: Any
    provider_key: Any


@dataclass
class ParsedEntities:
    """Flat, cross-referenced collections extracted from the input tree."""

    providers: list[ParsedProvider] = field(default_factory=list)
    registrations: list[ParsedRegistration] = field(default_factory=list)
    events: list[ParsedEvent] = field(default_factory=list)


# =============================================================================
# Results
# =============================================================================


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


@dataclass
class ProviderInfo:
    """Provider as resolved against Adobe I/O (id is None when creation failed)."""

    key: str
    label: str
    original_label: str
    id: str | None = None
    instance_id: str | None = None
    description: str | None = None
    docs_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id": self.id,
            "instanceId": self.instance_id,
            "key": self.key,
            "label": self.label,
            "originalLabel": self.original_label,
            "description": self.description,
            "docsUrl": self.docs_url,
        })


@dataclass
class EventInfo:
    event_code: str
    id: str | None = None
    label: str | None = None
    description: str | None = None
    sample_event_template: Any = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id": self.id,
            "eventCode": self.event_code,
            "label": self.label,
            "description": self.description,
            "sampleEventTemplate": self.sample_event_template,
        })


@dataclass
class RegistrationInfo:
    key: str
    label: str
    original_label: str
    id: str | None = None
    description: str | None = None
    client_id: str | None = None
    name: str | None = None
    webhook_url: str | None = None
    delivery_type: str | None = None
    runtime_action: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id": self.id,
            "key": self.key,
            "label": self.label,
            "originalLabel": self.original_label,
            "description": self.description,
            "clientId": self.client_id,
            "name": self.name,
            "webhookUrl": self.webhook_url,
            "deliveryType": self.delivery_type,
            "runtimeAction": self.runtime_action,
        })


@dataclass
class _OutcomeMixin:
    """
    Three-state outcome shared by every result record.

    Exactly one of created, skipped (existing) or failed holds.
    """

    def _check_outcome(self) -> None:
        if self.created and self.skipped:
            raise OnboardingError("A result cannot be both created and skipped")

    @property
    def failed(self) -> bool:
        return not self.created and not self.skipped

    @property
    def status(self) -> ResultStatus:
        if self.created:
            return "created"
        if self.skipped:
            return "existing"
        return "failed"


@dataclass
class ProviderResult(_OutcomeMixin):
    created: bool
    skipped: bool
    provider: ProviderInfo
    error: str | None = None
    reason: str | None = None
    raw: Any = None

    def __post_init__(self) -> None:
        self._check_outcome()

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "created": self.created,
            "skipped": self.skipped,
            "provider": self.provider.to_dict(),
            "error": self.error,
            "reason": self.reason,
            "raw": self.raw,
        })


@dataclass
class EventResult(_OutcomeMixin):
    created: bool
    skipped: bool
    event: EventInfo
    provider: ProviderInfo | None = None
    error: str | None = None
    reason: str | None = None
    raw: Any = None

    def __post_init__(self) -> None:
        self._check_outcome()

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "created": self.created,
            "skipped": self.skipped,
            "event": self.event.to_dict(),
            "provider": self.provider.to_dict() if self.provider else None,
            "error": self.error,
            "reason": self.reason,
            "raw": self.raw,
        })


@dataclass
class RegistrationResult(_OutcomeMixin):
    created: bool
    skipped: bool
    registration: RegistrationInfo
    provider: ProviderInfo | None = None
    error: str | None = None
    reason: str | None = None
    raw: Any = None

    def __post_init__(self) -> None:
        self._check_outcome()

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "created": self.created,
            "skipped": self.skipped,
            "registration": self.registration.to_dict(),
            "provider": self.provider.to_dict() if self.provider else None,
            "error": self.error,
            "reason": self.reason,
            "raw": self.raw,
        })


@dataclass
class OnboardEventsResponse:
    """Aggregated outcome of one onboarding run."""

    created_providers: list[ProviderResult] = field(default_factory=list)
    created_events: list[EventResult] = field(default_factory=list)
    created_registrations: list[RegistrationResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "createdProviders": [r.to_dict() for r in self.created_providers],
            "createdEvents": [r.to_dict() for r in self.created_events],
            "createdRegistrations": [r.to_dict() for r in self.created_registrations],
        }


# =============================================================================
# Summary
# =============================================================================


@dataclass
class OnboardSummaryItem:
    label: str
    status: ResultStatus
    id: str | None = None
    key: str | None = None
    event_code: str | None = None
    provider: str | None = None
    error: str | None = None


@dataclass
class OnboardSummaryCounts:
    created: int = 0
    existing: int = 0
    failed: int = 0
    total: int = 0


@dataclass
class OnboardSummarySection:
    items: list[OnboardSummaryItem] = field(default_factory=list)
    counts: OnboardSummaryCounts = field(default_factory=OnboardSummaryCounts)


@dataclass
class OnboardSummaryOverall:
    total_processed: int = 0
    total_created: int = 0
    total_existing: int = 0
    total_failed: int = 0


@dataclass
class OnboardEventsSummary:
    providers: OnboardSummarySection
    events: OnboardSummarySection
    registrations: OnboardSummarySection
    overall: OnboardSummaryOverall
