"""
Randomness and clock helpers shared by the profile and event generators.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from faker import Faker

DEFAULT_LOCALE = "en_US"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


def build_faker(seed: Optional[int] = None, locale: str = DEFAULT_LOCALE) -> Faker:
    """
    Create a Faker instance, seeded when `seed` is given.

    Args:
        seed: Optional seed for reproducible output.
        locale: Faker locale.
    """
    fake = Faker(locale)
    if seed is not None:
        fake.seed_instance(seed)
    return fake
