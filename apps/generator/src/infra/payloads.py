"""
Per-event-type payload synthesis.

Every payload carries the shared browsing fields (page URL, user agent,
device...) plus the fields specific to its event type. Builders only read
the generation context; they never modify it.
"""

from random import Random
from typing import Any, Callable, Dict, Sequence, TypeVar

from faker import Faker

from apps.generator.src.domain.models import (
    PAYLOAD_MODELS,
    AddToCartPayload,
    BasePayload,
    CheckoutPayload,
    DeviceType,
    EmailClickPayload,
    EmailOpenPayload,
    EventType,
    RemoveFromCartPayload,
    RichPushClickPayload,
    RichPushOpenPayload,
    SearchPayload,
    TransactionCompletePayload,
    ViewCartPayload,
)
from apps.generator.src.domain.sequencing import EventGenerationContext

_T = TypeVar("_T")

BROWSERS = ("Chrome", "Firefox", "Safari", "Edge")
OPERATING_SYSTEMS = ("Windows", "macOS", "Linux", "iOS", "Android")
PAYMENT_METHODS = ("credit_card", "paypal", "apple_pay", "google_pay")
SEARCH_QUERIES = (
    "laptop",
    "phone",
    "headphones",
    "shoes",
    "dress",
    "book",
    "camera",
    "watch",
)
EMAIL_SUBJECTS = (
    "Your order confirmation",
    "New products available",
    "Special offer just for you",
    "Welcome to our store",
    "Flash sale - 50% off!",
)
EMAIL_LINK_TEXTS = ("Shop Now", "Learn More", "View Details", "Get Offer")
PUSH_TITLES = (
    "New arrivals!",
    "Flash sale alert",
    "Order update",
    "Personalized recommendations",
)
PUSH_ACTIONS = ("view_product", "open_cart", "browse_category")

PRODUCT_ADJECTIVES = (
    "Ergonomic",
    "Rustic",
    "Sleek",
    "Handcrafted",
    "Refined",
    "Practical",
    "Gorgeous",
    "Incredible",
)
PRODUCT_MATERIALS = (
    "Cotton",
    "Steel",
    "Wooden",
    "Granite",
    "Bamboo",
    "Leather",
    "Plastic",
    "Concrete",
)
PRODUCT_NOUNS = (
    "Chair",
    "Keyboard",
    "Shoes",
    "Hat",
    "Lamp",
    "Backpack",
    "Watch",
    "Table",
)

REFERRER_PROBABILITY = 0.7


class PayloadFactory:
    """
    Builds the payload model registered for each event type.

    Randomness comes from the injected `Random` (choices, numbers) and
    `Faker` (ids, URLs, user agents, addresses, sentences).
    """

    def __init__(self, rng: Random, fake: Faker) -> None:
        self._rng = rng
        self._fake = fake

        extra_fields: Dict[EventType, Callable[[EventGenerationContext], Dict[str, Any]]] = {
            EventType.ADD_ITEM_TO_CART: self._add_to_cart,
            EventType.REMOVE_ITEM_FROM_CART: self._remove_from_cart,
            EventType.VIEW_CART: self._view_cart,
            EventType.CHECKOUT: self._checkout,
            EventType.TRANSACTION_COMPLETE: self._transaction_complete,
            EventType.SEARCH: self._search,
            EventType.EMAIL_OPEN: self._email_open,
            EventType.EMAIL_CLICK: self._email_click,
            EventType.RICHPUSH_OPEN: self._richpush_open,
            EventType.RICHPUSH_CLICK: self._richpush_click,
        }
        # Remaining types only carry the shared browsing fields.
        self._extra_fields = {
            event_type: extra_fields.get(event_type, self._no_extra_fields)
            for event_type in EventType
        }

    def build(self, event_type: EventType, context: EventGenerationContext) -> BasePayload:
        """
        Synthesize the payload for one event.

        Args:
            event_type: Type of the event being emitted.
            context: Current generation context (read only).

        Returns:
            An instance of `PAYLOAD_MODELS[event_type]`.
        """
        fields = self._base_fields(context)
        fields.update(self._extra_fields[event_type](context))
        return PAYLOAD_MODELS[event_type](**fields)

    def _pick(self, seq: Sequence[_T]) -> _T:
        return self._rng.choice(seq)

    def _amount(self, low: float, high: float) -> float:
        return round(self._rng.uniform(low, high), 2)

    def _product_name(self) -> str:
        return " ".join(
            (
                self._pick(PRODUCT_ADJECTIVES),
                self._pick(PRODUCT_MATERIALS),
                self._pick(PRODUCT_NOUNS),
            )
        )

    def _base_fields(self, context: EventGenerationContext) -> Dict[str, Any]:
        referrer = (
            self._fake.url() if self._rng.random() < REFERRER_PROBABILITY else None
        )
        return {
            "page_url": self._fake.url(),
            "user_agent": self._fake.user_agent(),
            "ip_address": self._fake.ipv4_public(),
            "session_id": context.session_id,
            "referrer": referrer,
            "device_type": self._pick(tuple(DeviceType)),
            "browser": self._pick(BROWSERS),
            "os": self._pick(OPERATING_SYSTEMS),
        }

    @staticmethod
    def _no_extra_fields(context: EventGenerationContext) -> Dict[str, Any]:
        return {}

    def _add_to_cart(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "product_id": self._fake.uuid4(),
            "product_name": self._product_name(),
            "quantity": self._rng.randint(1, 3),
            "price": self._amount(1.0, 1000.0),
        }

    def _remove_from_cart(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "product_id": self._fake.uuid4(),
            "product_name": self._product_name(),
            "quantity": self._rng.randint(1, 2),
        }

    def _view_cart(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "item_count": context.cart_items,
            "total_value": self._amount(10.0, 500.0),
        }

    def _checkout(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "item_count": context.cart_items,
            "total_value": self._amount(10.0, 500.0),
            "payment_method": self._pick(PAYMENT_METHODS),
        }

    def _transaction_complete(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "order_id": self._fake.uuid4(),
            "total_value": self._amount(10.0, 500.0),
            "payment_method": self._pick(PAYMENT_METHODS),
            "shipping_address": self._fake.street_address(),
        }

    def _search(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "query": self._pick(SEARCH_QUERIES),
            "results_count": self._rng.randint(10, 1000),
        }

    def _email_open(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "email_id": self._fake.uuid4(),
            "subject": self._pick(EMAIL_SUBJECTS),
            "campaign_id": self._fake.uuid4(),
        }

    def _email_click(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "email_id": self._fake.uuid4(),
            "link_url": self._fake.url(),
            "link_text": self._pick(EMAIL_LINK_TEXTS),
        }

    def _richpush_open(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "notification_id": self._fake.uuid4(),
            "title": self._pick(PUSH_TITLES),
            "body": self._fake.sentence(),
        }

    def _richpush_click(self, context: EventGenerationContext) -> Dict[str, Any]:
        return {
            "notification_id": self._fake.uuid4(),
            "action": self._pick(PUSH_ACTIONS),
        }
