"""
User event model + supporting enums and payload variants.

These models are shared between the profile/event generators, the NDJSON
sink and the tests. They define the typed contract for a single CDP user
event: an `EventType` tag plus the payload model registered for that tag
in `PAYLOAD_MODELS`.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, model_validator
from pydantic.alias_generators import to_camel


class EventType(str, Enum):
    PAGE_VIEW = "page_view"
    SEARCH = "search"
    ARTICLE_VIEW = "article_view"
    VIDEO_VIEW = "video_view"
    AUDIO_LISTEN = "audio_listen"
    AD_VIEW = "ad_view"
    AD_CLICK = "ad_click"
    EMAIL_OPEN = "email_open"
    EMAIL_CLICK = "email_click"
    ADD_ITEM_TO_CART = "add_itemToCart"
    REMOVE_ITEM_FROM_CART = "remove_itemFromCart"
    VIEW_CART = "view_cart"
    CHECKOUT = "checkout"
    TRANSACTION_COMPLETE = "transaction_complete"
    RICHPUSH_OPEN = "richpush_open"
    RICHPUSH_CLICK = "richpush_click"


class DeviceType(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"
    TABLET = "tablet"


# Every sequence opens with one of these.
ENTRY_EVENTS: Tuple[EventType, ...] = (EventType.PAGE_VIEW, EventType.SEARCH)

# Event types with no cart/checkout side effects.
PASSIVE_BROWSING_EVENTS: Tuple[EventType, ...] = (
    EventType.PAGE_VIEW,
    EventType.SEARCH,
    EventType.ARTICLE_VIEW,
    EventType.VIDEO_VIEW,
    EventType.AUDIO_LISTEN,
    EventType.AD_VIEW,
    EventType.AD_CLICK,
    EventType.EMAIL_OPEN,
    EventType.EMAIL_CLICK,
    EventType.RICHPUSH_OPEN,
    EventType.RICHPUSH_CLICK,
)


class BasePayload(BaseModel):
    """
    Fields shared by every event payload.

    Serialized with camelCase keys (``pageUrl``, ``sessionId``...).
    """

    page_url: str
    user_agent: str
    ip_address: str
    session_id: str
    referrer: Optional[str] = None
    device_type: DeviceType
    browser: str
    os: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AddToCartPayload(BasePayload):
    product_id: str
    product_name: str
    quantity: int = Field(ge=1, le=3)
    price: float = Field(gt=0)


class RemoveFromCartPayload(BasePayload):
    product_id: str
    product_name: str
    quantity: int = Field(ge=1, le=2)


class ViewCartPayload(BasePayload):
    item_count: int = Field(ge=0)
    total_value: float = Field(gt=0)


class CheckoutPayload(BasePayload):
    item_count: int = Field(ge=0)
    total_value: float = Field(gt=0)
    payment_method: str


class TransactionCompletePayload(BasePayload):
    order_id: str
    total_value: float = Field(gt=0)
    payment_method: str
    shipping_address: str


class SearchPayload(BasePayload):
    query: str
    results_count: int = Field(ge=0)


class EmailOpenPayload(BasePayload):
    email_id: str
    subject: str
    campaign_id: str


class EmailClickPayload(BasePayload):
    email_id: str
    link_url: str
    link_text: str


class RichPushOpenPayload(BasePayload):
    notification_id: str
    title: str
    body: str


class RichPushClickPayload(BasePayload):
    notification_id: str
    action: str


PAYLOAD_MODELS: Dict[EventType, Type[BasePayload]] = {
    EventType.PAGE_VIEW: BasePayload,
    EventType.SEARCH: SearchPayload,
    EventType.ARTICLE_VIEW: BasePayload,
    EventType.VIDEO_VIEW: BasePayload,
    EventType.AUDIO_LISTEN: BasePayload,
    EventType.AD_VIEW: BasePayload,
    EventType.AD_CLICK: BasePayload,
    EventType.EMAIL_OPEN: EmailOpenPayload,
    EventType.EMAIL_CLICK: EmailClickPayload,
    EventType.ADD_ITEM_TO_CART: AddToCartPayload,
    EventType.REMOVE_ITEM_FROM_CART: RemoveFromCartPayload,
    EventType.VIEW_CART: ViewCartPayload,
    EventType.CHECKOUT: CheckoutPayload,
    EventType.TRANSACTION_COMPLETE: TransactionCompletePayload,
    EventType.RICHPUSH_OPEN: RichPushOpenPayload,
    EventType.RICHPUSH_CLICK: RichPushClickPayload,
}


class UserEvent(BaseModel):
    """
    Typed user event emitted by the event sequence generator.

    `user_id` is only set for registered profiles; `cookie_id` is always
    present. Timestamps are timezone-aware UTC datetimes.
    """

    id: str
    user_id: Optional[str] = None
    cookie_id: str
    maid_id: Optional[str] = None
    event_type: EventType
    event_data: SerializeAsAny[BasePayload]
    timestamp: datetime
    country: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "0b8e6f0c-3f7c-4c1e-9a55-0f3c2d7f6a11",
                "userId": "5d1f2b9e-8a77-4f0e-b1f4-2b8d6b0a9c3e",
                "cookieId": "c2a3f4e5-6b7c-4d8e-9f01-23456789abcd",
                "eventType": "view_cart",
                "eventData": {
                    "pageUrl": "https://www.example.com/",
                    "userAgent": "Mozilla/5.0",
                    "ipAddress": "192.0.2.10",
                    "sessionId": "f7b8c7d3-52d3-4781-8e7d-b87e2fd2f1f7",
                    "deviceType": "mobile",
                    "browser": "Safari",
                    "os": "iOS",
                    "itemCount": 2,
                    "totalValue": 129.5,
                },
                "timestamp": "2026-10-01T12:30:00Z",
                "country": "United States",
            }
        },
    )

    @model_validator(mode="before")
    @classmethod
    def _parse_payload_for_event_type(cls, data: Any) -> Any:
        # Raw dicts (e.g. a parsed NDJSON line) are validated against the
        # payload model registered for the event type.
        if not isinstance(data, dict):
            return data
        type_key = "eventType" if "eventType" in data else "event_type"
        data_key = "eventData" if "eventData" in data else "event_data"
        payload = data.get(data_key)
        if isinstance(payload, dict) and data.get(type_key) is not None:
            model = PAYLOAD_MODELS[EventType(data[type_key])]
            data = {**data, data_key: model.model_validate(payload)}
        return data

    @model_validator(mode="after")
    def _payload_matches_event_type(self) -> "UserEvent":
        expected = PAYLOAD_MODELS[self.event_type]
        if type(self.event_data) is not expected:
            raise ValueError(
                f"event_data for {self.event_type.value} must be "
                f"{expected.__name__}, got {type(self.event_data).__name__}"
            )
        return self

    def to_json(self) -> str:
        """Serialize as a single compact JSON object, omitting absent fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
