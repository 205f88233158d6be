"""
Shared library package for the CDP demo data generator.

This package contains:
- shared Pydantic models (user events, event payloads, user profiles)
- observability utilities (logging, tracing, metrics)
- global application configuration
"""

from libs.models.events import (
    ENTRY_EVENTS,
    PASSIVE_BROWSING_EVENTS,
    PAYLOAD_MODELS,
    DeviceType,
    EventType,
    UserEvent,
)
from libs.models.profiles import Address, ProfileType, User, UserProfile

__all__ = [
    "UserEvent",
    "EventType",
    "DeviceType",
    "ENTRY_EVENTS",
    "PASSIVE_BROWSING_EVENTS",
    "PAYLOAD_MODELS",
    "User",
    "UserProfile",
    "ProfileType",
    "Address",
]
