"""Tests for per-event-type payload synthesis."""

import random

import pytest

from apps.generator.src.domain.models import (
    PAYLOAD_MODELS,
    AddToCartPayload,
    BasePayload,
    CheckoutPayload,
    EventType,
    RemoveFromCartPayload,
    ViewCartPayload,
)
from apps.generator.src.domain.sequencing import EventGenerationContext
from apps.generator.src.infra.payloads import (
    BROWSERS,
    OPERATING_SYSTEMS,
    PAYMENT_METHODS,
    PayloadFactory,
)
from apps.generator.src.infra.randomness import build_faker


@pytest.fixture
def factory() -> PayloadFactory:
    return PayloadFactory(random.Random(5), build_faker(5))


@pytest.fixture
def context(fixed_now) -> EventGenerationContext:
    return EventGenerationContext(
        session_id="session-42",
        base_timestamp=fixed_now,
        has_added_to_cart=True,
        has_viewed_cart=True,
        cart_items=3,
    )


class TestPayloadFactory:
    """PayloadFactory builds the registered model for every event type."""

    @pytest.mark.parametrize("event_type", list(EventType))
    def test_builds_registered_model(self, factory, context, event_type):
        payload = factory.build(event_type, context)
        assert type(payload) is PAYLOAD_MODELS[event_type]
        assert payload.session_id == "session-42"
        assert payload.browser in BROWSERS
        assert payload.os in OPERATING_SYSTEMS

    @pytest.mark.parametrize("event_type", list(EventType))
    def test_does_not_mutate_context(self, factory, context, event_type):
        before = EventGenerationContext(**vars(context))
        factory.build(event_type, context)
        assert context == before

    def test_passive_types_only_carry_base_fields(self, factory, context):
        payload = factory.build(EventType.AD_CLICK, context)
        assert type(payload) is BasePayload
        assert set(payload.model_dump()) == set(BasePayload.model_fields)

    def test_cart_payloads_within_bounds(self, factory, context):
        for _ in range(50):
            added = factory.build(EventType.ADD_ITEM_TO_CART, context)
            removed = factory.build(EventType.REMOVE_ITEM_FROM_CART, context)
            assert isinstance(added, AddToCartPayload)
            assert isinstance(removed, RemoveFromCartPayload)
            assert 1 <= added.quantity <= 3
            assert 1 <= removed.quantity <= 2
            assert added.price > 0

    def test_cart_views_report_current_item_count(self, factory, context):
        viewed = factory.build(EventType.VIEW_CART, context)
        checked_out = factory.build(EventType.CHECKOUT, context)
        assert isinstance(viewed, ViewCartPayload)
        assert isinstance(checked_out, CheckoutPayload)
        assert viewed.item_count == 3
        assert checked_out.item_count == 3
        assert checked_out.payment_method in PAYMENT_METHODS

    def test_camel_case_keys(self, factory, context):
        payload = factory.build(EventType.TRANSACTION_COMPLETE, context)
        dumped = payload.model_dump(by_alias=True)
        for key in ("pageUrl", "userAgent", "ipAddress", "sessionId", "orderId",
                    "totalValue", "paymentMethod", "shippingAddress"):
            assert key in dumped
