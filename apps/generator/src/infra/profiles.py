"""
Synthetic user and profile source.

Users get locale-appropriate names and addresses for the requested country;
profiles add the tracking identifiers (cookie, optional mobile id) and the
registered/anonymous split the event generator relies on.
"""

import hashlib
import random
import re
import unicodedata
from datetime import timedelta
from typing import Dict, List, NamedTuple, Optional, Sequence

from faker import Faker
from pydantic import BaseModel

from apps.generator.src.core.config import GeneratorSettings
from apps.generator.src.domain.models import Address, ProfileType, User, UserProfile
from apps.generator.src.domain.sequencing import bernoulli
from apps.generator.src.infra.randomness import (
    DEFAULT_LOCALE,
    Clock,
    build_faker,
    utc_now,
)
from libs.observability import get_logger

FEMALE_PROBABILITY = 0.53
ACCOUNT_AGE = timedelta(days=365)


class CountryProfile(NamedTuple):
    name: str
    locale: str
    # Faker provider method naming the first-level region for the locale.
    region_method: str


_UNITED_STATES = CountryProfile("United States", "en_US", "state")
_CANADA = CountryProfile("Canada", "en_CA", "province")
_UNITED_KINGDOM = CountryProfile("United Kingdom", "en_GB", "county")
_GERMANY = CountryProfile("Germany", "de_DE", "state")
_FRANCE = CountryProfile("France", "fr_FR", "region")

COUNTRIES: Dict[str, CountryProfile] = {
    "US": _UNITED_STATES,
    "USA": _UNITED_STATES,
    "CA": _CANADA,
    "CAN": _CANADA,
    "UK": _UNITED_KINGDOM,
    "GB": _UNITED_KINGDOM,
    "DE": _GERMANY,
    "GER": _GERMANY,
    "FR": _FRANCE,
    "FRA": _FRANCE,
}
COUNTRIES.update({profile.name.upper(): profile for profile in COUNTRIES.values()})


def resolve_country(country: str) -> CountryProfile:
    """
    Map a country name or code to its display name and Faker locale.

    Unknown inputs are kept as the country name and use the default locale.
    """
    key = country.strip().upper()
    return COUNTRIES.get(key, CountryProfile(country.strip(), DEFAULT_LOCALE, "state"))


def _email_part(value: str) -> str:
    folded = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode()
    return re.sub(r"[^a-z0-9-]", "", folded.lower()) or "user"


def hash_email(email: str) -> str:
    """SHA-256 hex digest of an email address."""
    return hashlib.sha256(email.encode("utf-8")).hexdigest()


class ProfileStatistics(BaseModel):
    total: int
    registered: int
    anonymous: int
    with_mobile_id: int
    without_mobile_id: int


def profile_statistics(profiles: Sequence[UserProfile]) -> ProfileStatistics:
    registered = sum(1 for profile in profiles if profile.is_registered)
    with_mobile_id = sum(1 for profile in profiles if profile.maid_id is not None)
    return ProfileStatistics(
        total=len(profiles),
        registered=registered,
        anonymous=len(profiles) - registered,
        with_mobile_id=with_mobile_id,
        without_mobile_id=len(profiles) - with_mobile_id,
    )


class ProfileGenerator:
    """
    Generates synthetic users and user profiles.

    Identifiers come from the shared Faker; names and addresses come from a
    per-locale Faker seeded from the shared random source, so a seeded run
    is reproducible whatever the country.
    """

    def __init__(
        self,
        cfg: GeneratorSettings,
        rng: Optional[random.Random] = None,
        fake: Optional[Faker] = None,
        clock: Clock = utc_now,
    ) -> None:
        self._cfg = cfg
        self._rng = rng or random.Random(cfg.seed)
        self._fake = fake or build_faker(cfg.seed)
        self._clock = clock
        self._locale_fakers: Dict[str, Faker] = {}
        self._log = get_logger(__name__)

    def _faker_for(self, locale: str) -> Faker:
        if locale not in self._locale_fakers:
            self._locale_fakers[locale] = build_faker(self._rng.getrandbits(32), locale)
        return self._locale_fakers[locale]

    def _maid_id(self, probability: float) -> Optional[str]:
        return self._fake.uuid4() if bernoulli(self._rng, probability) else None

    def _user(self, country: CountryProfile) -> User:
        local = self._faker_for(country.locale)
        if bernoulli(self._rng, FEMALE_PROBABILITY):
            first_name = local.first_name_female()
        else:
            first_name = local.first_name_male()
        last_name = local.last_name()

        email = (
            f"{_email_part(first_name)}.{_email_part(last_name)}"
            f"@{self._cfg.profiles.email_domain}"
        )
        region = getattr(local, country.region_method, local.city)
        created_offset = self._rng.uniform(0.0, ACCOUNT_AGE.total_seconds())

        return User(
            id=self._fake.uuid4(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            email_hash=hash_email(email),
            address=Address(
                street=local.street_address(),
                city=local.city(),
                state=region(),
                zip_code=local.postcode(),
                country=country.name,
            ),
            created_at=self._clock() - timedelta(seconds=created_offset),
        )

    def generate_users(self, count: int, country: str) -> List[User]:
        """
        Generate `count` users with names and addresses for `country`.

        Args:
            count: Number of users.
            country: Country name or code (US, CA, UK/GB, DE, FR...).
        """
        resolved = resolve_country(country)
        return [self._user(resolved) for _ in range(count)]

    def generate_profiles(self, count: int, country: str) -> List[UserProfile]:
        """
        Generate `count` user profiles for `country`.

        Each profile is registered with `registered_user_probability`; the
        mobile id probability depends on the profile type.
        """
        profile_cfg = self._cfg.profiles
        profiles: List[UserProfile] = []

        for user in self.generate_users(count, country):
            if bernoulli(self._rng, profile_cfg.registered_user_probability):
                profile_type = ProfileType.REGISTERED
                maid_probability = profile_cfg.mobile_id_probability.registered
            else:
                profile_type = ProfileType.ANONYMOUS
                maid_probability = profile_cfg.mobile_id_probability.anonymous

            profiles.append(
                UserProfile(
                    **user.model_dump(),
                    profile_type=profile_type,
                    cookie_id=self._fake.uuid4(),
                    maid_id=self._maid_id(maid_probability),
                )
            )

        stats = profile_statistics(profiles)
        self._log.info(
            "Generated user profiles.",
            extra={"country": resolve_country(country).name, **stats.model_dump()},
        )
        return profiles

    def anonymous_identity(self) -> UserProfile:
        """Anonymous visitor known only by its cookie (and maybe a mobile id)."""
        return UserProfile(
            id=self._fake.uuid4(),
            profile_type=ProfileType.ANONYMOUS,
            cookie_id=self._fake.uuid4(),
            maid_id=self._maid_id(self._cfg.profiles.mobile_id_probability.anonymous),
        )
