"""
Service-specific configuration for the generator.

This module ONLY handles synthetic data settings: how many users, how many
events per user, the event-sequencing probabilities, profile mix, seed and
output target. It reads namespaced keys from the environment (or the root
.env file), with `__` separating nested sections:

    GENERATOR__COUNTRY=FR
    GENERATOR__USER_COUNT=50
    GENERATOR__EVENT_COUNT_PER_USER__MIN=5
    GENERATOR__EVENT_COUNT_PER_USER__MAX=15
    GENERATOR__EVENTS__ADD_TO_CART_PROBABILITY=0.4
    GENERATOR__PROFILES__MOBILE_ID_PROBABILITY__ANONYMOUS=0.5
    GENERATOR__SEED=42
    GENERATOR__OUTPUT_PATH=output/user_events.ndjson
    GENERATOR__PROFILES_OUTPUT_PATH=output/user_profiles.ndjson

Validation here is the only guard for the generator's preconditions; the
generator itself assumes validated input.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from libs.config import DEFAULT_ENV_PATH


class CountRange(BaseModel):
    """Inclusive integer range `[min, max]`."""

    min: int = Field(ge=0)
    max: int = Field(ge=0)

    @model_validator(mode="after")
    def _max_not_below_min(self) -> "CountRange":
        if self.max < self.min:
            raise ValueError(f"max ({self.max}) must be >= min ({self.min})")
        return self


class EventGenerationSettings(BaseModel):
    """
    Transition probabilities of the event-sequencing state machine.

    Each value is the chance that the corresponding rule fires when its
    precondition holds.
    """

    session_continuation_probability: float = Field(default=0.7, ge=0.0, le=1.0)
    add_to_cart_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    view_cart_after_add_probability: float = Field(default=0.6, ge=0.0, le=1.0)
    checkout_after_view_cart_probability: float = Field(default=0.4, ge=0.0, le=1.0)
    transaction_after_checkout_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    remove_from_cart_probability: float = Field(default=0.2, ge=0.0, le=1.0)


class MobileIdProbability(BaseModel):
    registered: float = Field(default=0.3, ge=0.0, le=1.0)
    anonymous: float = Field(default=0.4, ge=0.0, le=1.0)


class UserProfileSettings(BaseModel):
    registered_user_probability: float = Field(default=0.7, ge=0.0, le=1.0)
    mobile_id_probability: MobileIdProbability = Field(
        default_factory=MobileIdProbability
    )
    email_domain: str = Field(
        default="mediarithmics.com",
        description="Domain used for generated profile email addresses.",
    )


class GeneratorSettings(BaseSettings):
    """
    Settings controlling synthetic profile and event generation.

    Values come from environment variables prefixed with `GENERATOR__`.
    """

    country: str = Field(
        default="US",
        description="Country name or code (US, CA, UK/GB, DE, FR...).",
    )
    user_count: int = Field(default=20, ge=0)

    event_count_per_user: CountRange = Field(
        default_factory=lambda: CountRange(min=10, max=20)
    )
    anonymous_user_count: CountRange = Field(
        default_factory=lambda: CountRange(min=5, max=10)
    )

    events: EventGenerationSettings = Field(default_factory=EventGenerationSettings)
    profiles: UserProfileSettings = Field(default_factory=UserProfileSettings)

    seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible runs; unseeded when omitted.",
    )
    output_path: Optional[str] = Field(
        default=None,
        description="NDJSON destination for events; stdout when omitted.",
    )
    profiles_output_path: Optional[str] = Field(
        default=None,
        description=(
            "NDJSON destination for user profiles; defaults to "
            "user_profiles_<country>.ndjson next to `output_path`."
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="GENERATOR__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("event_count_per_user")
    @classmethod
    def _at_least_one_event(cls, value: CountRange) -> CountRange:
        if value.min < 1:
            raise ValueError("event_count_per_user.min must be >= 1")
        return value

    @field_validator("country")
    @classmethod
    def _country_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("country must not be blank")
        return value.strip()

    def resolve_profiles_output_path(self) -> Optional[str]:
        """
        Where user profiles are written.

        Returns:
            `profiles_output_path` when set, else a sibling of `output_path`,
            else None (events go to stdout and profiles are not written).
        """
        if self.profiles_output_path is not None:
            return self.profiles_output_path
        if self.output_path is None:
            return None
        name = f"user_profiles_{self.country.lower().replace(' ', '_')}.ndjson"
        return str(Path(self.output_path).with_name(name))


@lru_cache()
def get_generator_settings() -> GeneratorSettings:
    """
    Cached accessor for GeneratorSettings.

    Returns:
        GeneratorSettings: validated generator configuration.

    Raises:
        RuntimeError: If any configured value fails validation.
    """
    try:
        env_file = str(DEFAULT_ENV_PATH) if DEFAULT_ENV_PATH.exists() else None
        return GeneratorSettings(_env_file=env_file)
    except ValidationError as exc:
        raise RuntimeError("Invalid generator configuration values.") from exc
