"""Tests for the synthetic user and profile source."""

import hashlib
import random
import re
from datetime import timedelta

import pytest

from apps.generator.src.domain.models import ProfileType
from apps.generator.src.infra.profiles import (
    ProfileGenerator,
    hash_email,
    profile_statistics,
    resolve_country,
)
from apps.generator.src.infra.randomness import build_faker

EMAIL_PATTERN = re.compile(r"^[a-z0-9-]+\.[a-z0-9-]+@[a-z0-9.-]+$")


@pytest.fixture
def make_profile_generator(fixed_now):
    def _make(settings, seed: int = 3) -> ProfileGenerator:
        return ProfileGenerator(
            settings,
            rng=random.Random(seed),
            fake=build_faker(seed),
            clock=lambda: fixed_now,
        )

    return _make


class TestResolveCountry:
    """Country codes and names map to a display name and Faker locale."""

    @pytest.mark.parametrize(
        "value, name, locale",
        [
            ("US", "United States", "en_US"),
            ("usa", "United States", "en_US"),
            ("CA", "Canada", "en_CA"),
            ("UK", "United Kingdom", "en_GB"),
            ("GB", "United Kingdom", "en_GB"),
            ("DE", "Germany", "de_DE"),
            ("GER", "Germany", "de_DE"),
            ("FR", "France", "fr_FR"),
            ("France", "France", "fr_FR"),
        ],
    )
    def test_known_countries(self, value, name, locale):
        resolved = resolve_country(value)
        assert resolved.name == name
        assert resolved.locale == locale

    def test_unknown_country_passes_through(self):
        resolved = resolve_country("Narnia")
        assert resolved.name == "Narnia"
        assert resolved.locale == "en_US"


class TestGenerateUsers:
    """generate_users builds complete, locale-specific users."""

    @pytest.mark.parametrize("country", ["US", "CA", "UK", "DE", "FR"])
    def test_users_are_complete(self, country, make_settings, make_profile_generator, fixed_now):
        generator = make_profile_generator(make_settings())
        users = generator.generate_users(15, country)

        assert len(users) == 15
        assert len({user.id for user in users}) == 15
        for user in users:
            assert EMAIL_PATTERN.match(user.email), user.email
            assert user.email.endswith("@mediarithmics.com")
            assert user.email_hash == hashlib.sha256(user.email.encode()).hexdigest()
            assert user.address.country == resolve_country(country).name
            assert user.address.street and user.address.city and user.address.state
            assert fixed_now - timedelta(days=365) <= user.created_at <= fixed_now

    def test_custom_email_domain(self, make_settings, make_profile_generator):
        settings = make_settings(profiles={"email_domain": "example.org"})
        users = make_profile_generator(settings).generate_users(3, "US")
        assert all(user.email.endswith("@example.org") for user in users)

    def test_zero_users(self, make_settings, make_profile_generator):
        assert make_profile_generator(make_settings()).generate_users(0, "US") == []

    def test_same_seed_same_users(self, make_settings, make_profile_generator):
        settings = make_settings()
        first = make_profile_generator(settings, seed=9).generate_users(5, "DE")
        second = make_profile_generator(settings, seed=9).generate_users(5, "DE")
        assert first == second


class TestGenerateProfiles:
    """generate_profiles applies the registered/anonymous and mobile id mix."""

    def test_all_registered_with_mobile_ids(self, make_settings, make_profile_generator):
        settings = make_settings(
            profiles={
                "registered_user_probability": 1.0,
                "mobile_id_probability": {"registered": 1.0, "anonymous": 0.0},
            }
        )
        profiles = make_profile_generator(settings).generate_profiles(10, "US")

        assert all(p.profile_type is ProfileType.REGISTERED for p in profiles)
        assert all(p.maid_id is not None for p in profiles)
        assert all(p.email and p.first_name for p in profiles)

    def test_all_anonymous_without_mobile_ids(self, make_settings, make_profile_generator):
        settings = make_settings(
            profiles={
                "registered_user_probability": 0.0,
                "mobile_id_probability": {"registered": 1.0, "anonymous": 0.0},
            }
        )
        profiles = make_profile_generator(settings).generate_profiles(10, "FR")

        assert all(p.profile_type is ProfileType.ANONYMOUS for p in profiles)
        assert all(p.maid_id is None for p in profiles)
        assert len({p.cookie_id for p in profiles}) == 10

    def test_anonymous_identity_has_only_identifiers(self, make_settings, make_profile_generator):
        profile = make_profile_generator(make_settings()).anonymous_identity()

        assert profile.profile_type is ProfileType.ANONYMOUS
        assert profile.cookie_id
        assert profile.email is None
        assert profile.address is None


class TestProfileStatistics:
    def test_counts(self, make_settings, make_profile_generator):
        profiles = make_profile_generator(make_settings()).generate_profiles(30, "US")
        stats = profile_statistics(profiles)

        assert stats.total == 30
        assert stats.registered + stats.anonymous == 30
        assert stats.with_mobile_id + stats.without_mobile_id == 30
        assert stats.registered == sum(1 for p in profiles if p.is_registered)

    def test_empty(self):
        stats = profile_statistics([])
        assert stats.total == stats.registered == stats.with_mobile_id == 0


def test_hash_email_is_sha256_hex():
    digest = hash_email("jane.doe@mediarithmics.com")
    assert len(digest) == 64
    assert digest == hashlib.sha256(b"jane.doe@mediarithmics.com").hexdigest()
