"""Tests for the onboarding input parser."""

import pytest
from pydantic import ValidationError

from aio_toolkit.onboarding.input_parser import InputParser, parse
from aio_toolkit.onboarding.models import OnboardEventsInput


@pytest.fixture
def nested_input() -> dict:
    return {
        "providers": [
            {
                "key": "ocp",
                "label": "OCP Provider",
                "description": "External OCP system",
                "docsUrl": None,
                "registrations": [
                    {
                        "key": "product",
                        "label": "Product Sync",
                        "description": "Product Sync",
                        "events": [
                            {
                                "eventCode": "product.created",
                                "runtimeAction": "product/consumer",
                                "deliveryType": "webhook",
                                "sampleEventTemplate": {"sku": "SKU-1"},
                            },
                            {
                                "eventCode": "product.deleted",
                                "runtimeAction": "product/consumer",
                                "deliveryType": "journal",
                                "sampleEventTemplate": None,
                            },
                        ],
                    },
                    {
                        "key": "stock",
                        "label": "Stock Sync",
                        "description": "Stock Sync",
                        "events": [
                            {
                                "eventCode": "stock.updated",
                                "runtimeAction": "stock/consumer",
                                "deliveryType": "webhook",
                                "sampleEventTemplate": {},
                            },
                        ],
                    },
                ],
            },
            {
                "key": "magento",
                "label": "Magento Commerce",
                "description": "Commerce events",
                "docsUrl": "https://docs.magento.com",
                "registrations": [
                    {
                        "key": "order",
                        "label": "Order Events",
                        "description": "Order Events",
                        "events": [
                            {
                                "eventCode": "order.placed",
                                "runtimeAction": "order/consumer",
                                "deliveryType": "webhook",
                                "sampleEventTemplate": {"orderId": "1"},
                            },
                        ],
                    },
                ],
            },
        ],
    }


class TestInputParser:
    """Tests for flattening the input tree."""

    def test_counts_match_input(self, nested_input: dict) -> None:
        """Test one entity per provider, registration and event."""
        entities = parse(nested_input)

        assert len(entities.providers) == 2
        assert len(entities.registrations) == 3
        assert len(entities.events) == sum(
            len(r["events"])
            for p in nested_input["providers"]
            for r in p["registrations"]
        )

    def test_events_reference_their_parents(self, nested_input: dict) -> None:
        """Test foreign keys on registrations and events."""
        entities = parse(nested_input)

        assert [r.provider_key for r in entities.registrations] == ["ocp", "ocp", "magento"]
        assert [(e.registration_key, e.provider_key) for e in entities.events] == [
            ("product", "ocp"),
            ("product", "ocp"),
            ("stock", "ocp"),
            ("order", "magento"),
        ]

    def test_input_order_is_preserved(self, nested_input: dict) -> None:
        """Test events come out in document order."""
        entities = parse(nested_input)

        assert [e.event_code for e in entities.events] == [
            "product.created",
            "product.deleted",
            "stock.updated",
            "order.placed",
        ]

    def test_event_fields_are_copied(self, nested_input: dict) -> None:
        """Test runtime action, delivery type and template pass through."""
        event = parse(nested_input).events[1]

        assert event.runtime_action == "product/consumer"
        assert event.delivery_type == "journal"
        assert event.sample_event_template is None

    def test_provider_fields_are_copied(self, nested_input: dict) -> None:
        """Test provider docs URL survives parsing."""
        providers = parse(nested_input).providers

        assert providers[0].docs_url is None
        assert providers[1].docs_url == "https://docs.magento.com"
        assert providers[1].description == "Commerce events"

    def test_accepts_model_input(self, nested_input: dict) -> None:
        """Test the parser takes a validated model as well as a mapping."""
        model = OnboardEventsInput.model_validate(nested_input)
        entities = InputParser(model).get_entities()

        assert len(entities.events) == 4

    def test_empty_providers(self) -> None:
        """Test an empty input produces empty collections."""
        entities = parse({"providers": []})

        assert entities.providers == []
        assert entities.registrations == []
        assert entities.events == []

    def test_duplicate_keys_pass_through(self) -> None:
        """Test duplicate keys are not rejected."""
        provider = {"key": "dup", "label": "A", "description": "", "registrations": []}
        entities = parse({"providers": [provider, {**provider, "label": "B"}]})

        assert [p.key for p in entities.providers] == ["dup", "dup"]

    def test_null_optional_fields_pass_through(self) -> None:
        """Test null descriptions and event settings become empty strings."""
        entities = parse({
            "providers": [{
                "key": "p",
                "label": "P",
                "description": None,
                "registrations": [{
                    "key": "r",
                    "label": "R",
                    "description": None,
                    "events": [{"eventCode": "a.b", "runtimeAction": None, "deliveryType": None}],
                }],
            }]
        })

        assert entities.providers[0].description == ""
        assert entities.registrations[0].description == ""
        event = entities.events[0]
        assert event.event_code == "a.b"
        assert event.runtime_action == ""
        assert event.delivery_type == ""

    def test_malformed_keys_pass_through(self) -> None:
        """Test null or missing keys and event codes are not rejected."""
        entities = parse({
            "providers": [{
                "key": None,
                "label": "P",
                "registrations": [{"key": 7, "events": [{}]}],
            }]
        })

        assert entities.providers[0].key is None
        assert entities.registrations[0].key == 7
        assert entities.registrations[0].label is None
        assert entities.events[0].event_code is None
        assert entities.events[0].registration_key == 7
        assert entities.events[0].provider_key is None

    def test_null_child_lists_are_empty(self) -> None:
        """Test null providers, registrations or events yield no entities."""
        assert parse({"providers": None}).providers == []

        entities = parse({
            "providers": [{
                "key": "p",
                "label": "P",
                "registrations": [{"key": "r", "label": "R", "events": None}],
            }, {"key": "q", "label": "Q", "registrations": None}]
        })

        assert len(entities.providers) == 2
        assert len(entities.registrations) == 1
        assert entities.events == []

    def test_non_list_tree_is_rejected(self) -> None:
        """Test a tree whose shape is not a list of providers fails validation."""
        with pytest.raises(ValidationError):
            parse({"providers": "not-a-list"})

    def test_parsed_entities_are_immutable(self, nested_input: dict) -> None:
        """Test parsed records cannot be mutated in place."""
        provider = parse(nested_input).providers[0]

        with pytest.raises(AttributeError):
            provider.label = "changed"
