"""Tests for event metadata creation."""

from unittest.mock import AsyncMock

import pytest

from aio_toolkit.onboarding.events import CreateEvents
from aio_toolkit.onboarding.models import ParsedEvent, ProviderInfo, ProviderResult


def make_event(code: str, provider_key: str = "ocp", **kwargs) -> ParsedEvent:
    return ParsedEvent(
        event_code=code,
        runtime_action=kwargs.get("runtime_action", "app/consumer"),
        delivery_type=kwargs.get("delivery_type", "webhook"),
        sample_event_template=kwargs.get("sample_event_template", {"id": 1}),
        registration_key=kwargs.get("registration_key", "reg"),
        provider_key=provider_key,
    )


def make_provider_result(key: str = "ocp", provider_id: str | None = "prov-1") -> ProviderResult:
    return ProviderResult(
        created=provider_id is not None,
        skipped=False,
        provider=ProviderInfo(
            id=provider_id,
            key=key,
            label=f"Acme - {key}",
            original_label=key,
        ),
        error=None if provider_id else "boom",
    )


class TestCreateEvents:
    """Tests for CreateEvents."""

    @pytest.mark.asyncio
    async def test_creates_events_for_provider(self, event_metadata_store, mock_logger) -> None:
        """Test every event of a provider is created and stamped with the provider."""
        creator = CreateEvents(event_metadata_store, mock_logger)
        provider = make_provider_result()

        results = await creator.process(
            [make_event("order.created"), make_event("order.updated")], [provider], "Acme"
        )

        assert [r.event.event_code for r in results] == ["order.created", "order.updated"]
        assert all(r.created for r in results)
        assert all(r.provider is provider.provider for r in results)
        assert results[0].event.id == "evt-order.created"
        event_metadata_store.list.assert_awaited_once_with("prov-1")

    @pytest.mark.asyncio
    async def test_payload_shape(self, event_metadata_store, mock_logger) -> None:
        """Test label and description default to the event code."""
        creator = CreateEvents(event_metadata_store, mock_logger)

        await creator.process([make_event("order.created")], [make_provider_result()])

        event_metadata_store.create.assert_awaited_once_with(
            "prov-1",
            {
                "event_code": "order.created",
                "label": "order.created",
                "description": "order.created",
                "sample_event_template": {"id": 1},
            },
        )

    @pytest.mark.asyncio
    async def test_empty_template_is_not_sent(self, event_metadata_store, mock_logger) -> None:
        """Test an empty or missing template is omitted from the payload."""
        creator = CreateEvents(event_metadata_store, mock_logger)

        await creator.process(
            [make_event("a.one", sample_event_template={}), make_event("a.two", sample_event_template=None)],
            [make_provider_result()],
        )

        for call in event_metadata_store.create.await_args_list:
            assert "sample_event_template" not in call.args[1]

    @pytest.mark.asyncio
    async def test_skips_existing_event_code(self, event_metadata_store, mock_logger) -> None:
        """Test an event code already registered is skipped."""
        event_metadata_store.list = AsyncMock(return_value=[{"event_code": "order.created"}])
        creator = CreateEvents(event_metadata_store, mock_logger)

        results = await creator.process(
            [make_event("order.created"), make_event("order.updated")], [make_provider_result()]
        )

        skipped, created = results
        assert skipped.skipped is True
        assert skipped.reason == "Already exists"
        assert skipped.event.event_code == "order.created"
        assert created.created is True
        event_metadata_store.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_id_falls_back_to_event_code(self, event_metadata_store, mock_logger) -> None:
        """Test the id comes from the response event code when no id is returned."""
        event_metadata_store.create = AsyncMock(return_value={"event_code": "x"})
        creator = CreateEvents(event_metadata_store, mock_logger)

        results = await creator.process([make_event("order.created")], [make_provider_result()])

        assert results[0].created is True
        assert results[0].event.id == "x"

    @pytest.mark.asyncio
    async def test_id_falls_back_to_input_code(self, event_metadata_store, mock_logger) -> None:
        """Test the id comes from the input event code as a last resort."""
        event_metadata_store.create = AsyncMock(return_value={"label": "whatever"})
        creator = CreateEvents(event_metadata_store, mock_logger)

        results = await creator.process([make_event("order.created")], [make_provider_result()])

        assert results[0].event.id == "order.created"

    @pytest.mark.asyncio
    async def test_empty_create_response_fails(self, event_metadata_store, mock_logger) -> None:
        """Test an empty create response is reported as a failure."""
        event_metadata_store.create = AsyncMock(return_value=None)
        creator = CreateEvents(event_metadata_store, mock_logger)

        results = await creator.process([make_event("order.created")], [make_provider_result()])

        assert results[0].failed is True
        assert results[0].error == "Event metadata creation returned no result"

    @pytest.mark.asyncio
    async def test_create_failure_continues(self, event_metadata_store, mock_logger) -> None:
        """Test one failing event does not stop the others."""
        event_metadata_store.create = AsyncMock(
            side_effect=[Exception("Invalid event"), {"id": "e2"}]
        )
        creator = CreateEvents(event_metadata_store, mock_logger)

        results = await creator.process(
            [make_event("a.one"), make_event("a.two")], [make_provider_result()]
        )

        assert results[0].status == "failed"
        assert results[0].error == "Invalid event"
        assert results[1].status == "created"

    @pytest.mark.asyncio
    async def test_list_failure_is_swallowed(self, event_metadata_store, mock_logger) -> None:
        """Test a metadata listing failure behaves like no existing events."""
        event_metadata_store.list = AsyncMock(side_effect=Exception("Network down"))
        creator = CreateEvents(event_metadata_store, mock_logger)

        results = await creator.process([make_event("order.created")], [make_provider_result()])

        assert results[0].created is True
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_skips_provider_without_id(self, event_metadata_store, mock_logger) -> None:
        """Test failed providers are skipped with a warning."""
        creator = CreateEvents(event_metadata_store, mock_logger)

        results = await creator.process(
            [make_event("order.created")], [make_provider_result(provider_id=None)]
        )

        assert results == []
        event_metadata_store.list.assert_not_awaited()
        mock_logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_events_filtered_by_provider_key(
        self, event_metadata_store, mock_logger
    ) -> None:
        """Test events only go to the provider whose key they reference."""
        creator = CreateEvents(event_metadata_store, mock_logger)
        first = make_provider_result("first", "p1")
        second = make_provider_result("second", "p2")

        results = await creator.process(
            [make_event("a.one", "first"), make_event("b.one", "second"), make_event("a.two", "first")],
            [first, second],
        )

        assert [(r.provider.key, r.event.event_code) for r in results] == [
            ("first", "a.one"),
            ("first", "a.two"),
            ("second", "b.one"),
        ]

    @pytest.mark.asyncio
    async def test_no_events(self, event_metadata_store, mock_logger) -> None:
        """Test an empty event list returns immediately."""
        creator = CreateEvents(event_metadata_store, mock_logger)

        assert await creator.process([], [make_provider_result()]) == []
        event_metadata_store.list.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_providers(self, event_metadata_store, mock_logger) -> None:
        """Test an empty provider list returns immediately."""
        creator = CreateEvents(event_metadata_store, mock_logger)

        assert await creator.process([make_event("order.created")], []) == []
        event_metadata_store.list.assert_not_awaited()
