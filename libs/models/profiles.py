"""
User profile model shared by the profile source and the event generator.

A profile is the identity record events are linked to: registered profiles
carry a stable `id` that becomes the event `userId`, anonymous profiles are
tracked only through `cookie_id` / `maid_id`.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProfileType(str, Enum):
    REGISTERED = "registered"
    ANONYMOUS = "anonymous"


class Address(BaseModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class User(BaseModel):
    """Synthetic person, before any tracking identifiers are attached."""

    id: str
    first_name: str
    last_name: str
    email: str
    email_hash: str
    address: Address
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class UserProfile(BaseModel):
    """
    Identity record with tracking identifiers.

    Personal fields are optional: synthetic anonymous identities created
    for the batch event run only carry identifiers.
    """

    id: str
    profile_type: ProfileType
    cookie_id: str
    maid_id: Optional[str] = None

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    email_hash: Optional[str] = None
    address: Optional[Address] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @property
    def is_registered(self) -> bool:
        return self.profile_type is ProfileType.REGISTERED

    def to_json(self) -> str:
        """Serialize as a single compact JSON object, omitting absent fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
