"""
Domain-level models used by the generator.

This module re-exports the shared event and profile models so that the
generator can depend on a stable, well-named import:

    from apps.generator.src.domain.models import UserEvent
"""

from libs.models.events import (
    ENTRY_EVENTS,
    PASSIVE_BROWSING_EVENTS,
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
    UserEvent,
    ViewCartPayload,
)
from libs.models.profiles import Address, ProfileType, User, UserProfile

__all__ = [
    "UserEvent",
    "EventType",
    "DeviceType",
    "ENTRY_EVENTS",
    "PASSIVE_BROWSING_EVENTS",
    "PAYLOAD_MODELS",
    "BasePayload",
    "AddToCartPayload",
    "RemoveFromCartPayload",
    "ViewCartPayload",
    "CheckoutPayload",
    "TransactionCompletePayload",
    "SearchPayload",
    "EmailOpenPayload",
    "EmailClickPayload",
    "RichPushOpenPayload",
    "RichPushClickPayload",
    "User",
    "UserProfile",
    "ProfileType",
    "Address",
]
