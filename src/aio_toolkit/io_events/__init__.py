"""Adobe I/O Events API managers."""

from aio_toolkit.io_events.base import IO_EVENTS_BASE_URL, IOEventsCredentials
from aio_toolkit.io_events.client import IOEventsClient
from aio_toolkit.io_events.event_metadata import EventMetadataManager
from aio_toolkit.io_events.providers import ProviderManager
from aio_toolkit.io_events.registrations import DELIVERY_TYPES, RegistrationManager

__all__ = [
    "DELIVERY_TYPES",
    "IO_EVENTS_BASE_URL",
    "EventMetadataManager",
    "IOEventsClient",
    "IOEventsCredentials",
    "ProviderManager",
    "RegistrationManager",
]
