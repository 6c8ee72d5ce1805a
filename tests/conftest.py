"""Pytest configuration and fixtures."""

import logging
import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Keep settings independent of the developer's shell
os.environ.setdefault("AIO_LOG_JSON", "false")


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double that records every call."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def provider_store() -> MagicMock:
    """Provider store with no existing providers."""
    store = MagicMock()
    store.list = AsyncMock(return_value=[])
    store.create = AsyncMock(
        side_effect=lambda payload: {
            "id": f"prov-{payload['label']}",
            "label": payload["label"],
            "instance_id": payload.get("instance_id"),
        }
    )
    return store


@pytest.fixture
def event_metadata_store() -> MagicMock:
    """Event metadata store with no existing metadata."""
    store = MagicMock()
    store.list = AsyncMock(return_value=[])
    store.create = AsyncMock(
        side_effect=lambda provider_id, payload: {
            "id": f"evt-{payload['event_code']}",
            "event_code": payload["event_code"],
        }
    )
    return store


@pytest.fixture
def registration_store() -> MagicMock:
    """Registration store with no existing registrations."""
    store = MagicMock()
    store.list = AsyncMock(return_value=[])
    store.create = AsyncMock(
        side_effect=lambda payload: {
            "id": f"reg-{payload['name']}",
            "registration_id": f"regid-{payload['name']}",
            "name": payload["name"],
        }
    )
    return store


@pytest.fixture
def sample_input() -> dict:
    """
    One provider, one registration, two events.

    The provider key equals its label so that registration grouping (by the
    event's provider key) resolves the provider (by original label).
    """
    return {
        "providers": [
            {
                "key": "Order Events",
                "label": "Order Events",
                "description": "Order lifecycle events",
                "docsUrl": None,
                "registrations": [
                    {
                        "key": "orders",
                        "label": "Order Sync",
                        "description": "Sync orders to ERP",
                        "events": [
                            {
                                "eventCode": "order.created",
                                "runtimeAction": "orders/consumer",
                                "deliveryType": "webhook",
                                "sampleEventTemplate": {"orderId": "1"},
                            },
                            {
                                "eventCode": "order.updated",
                                "runtimeAction": "orders/consumer",
                                "deliveryType": "webhook",
                                "sampleEventTemplate": {"orderId": "1"},
                            },
                        ],
                    },
                ],
            },
        ],
    }
