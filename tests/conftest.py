"""Shared fixtures for the generator tests."""

import os
import random
from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from apps.generator.src.core.config import GeneratorSettings
from apps.generator.src.domain.models import ProfileType, UserProfile
from apps.generator.src.infra.generator import EventGenerator
from apps.generator.src.infra.profiles import ProfileGenerator
from apps.generator.src.infra.randomness import build_faker

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep GENERATOR__* variables from the caller's shell out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("GENERATOR__"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_settings() -> Callable[..., GeneratorSettings]:
    """Build GeneratorSettings from keyword overrides (nested sections as dicts)."""

    def _make(**overrides: Any) -> GeneratorSettings:
        return GeneratorSettings(**overrides)

    return _make


@pytest.fixture
def make_event_generator() -> Callable[..., EventGenerator]:
    """Build a seeded EventGenerator with a fixed clock."""

    def _make(settings: GeneratorSettings, seed: int = 7) -> EventGenerator:
        rng = random.Random(seed)
        fake = build_faker(seed)
        profiles = ProfileGenerator(settings, rng=rng, fake=fake, clock=fixed_clock)
        return EventGenerator(
            settings, rng=rng, fake=fake, profiles=profiles, clock=fixed_clock
        )

    return _make


@pytest.fixture
def registered_profile() -> UserProfile:
    return UserProfile(
        id="user-1",
        profile_type=ProfileType.REGISTERED,
        cookie_id="cookie-1",
        maid_id="maid-1",
    )


@pytest.fixture
def anonymous_profile() -> UserProfile:
    return UserProfile(
        id="anon-1",
        profile_type=ProfileType.ANONYMOUS,
        cookie_id="cookie-2",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
