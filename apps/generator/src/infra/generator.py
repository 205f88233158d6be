"""
Synthetic user event generator implementation.

Generates chronologically ordered, causally consistent event sequences per
user profile, using the transition table from `domain.sequencing` and the
payload builders from `infra.payloads`.
"""

import random
from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from faker import Faker

from apps.generator.src.core.config import GeneratorSettings
from apps.generator.src.domain.models import UserEvent, UserProfile
from apps.generator.src.domain.sequencing import (
    EventGenerationContext,
    apply_event,
    bernoulli,
    next_event_type,
)
from apps.generator.src.infra.payloads import PayloadFactory
from apps.generator.src.infra.profiles import ProfileGenerator
from apps.generator.src.infra.randomness import Clock, build_faker, utc_now
from libs.observability import get_generator_instruments, get_logger, get_tracer

RECENT_WINDOW = timedelta(days=30)
MIN_EVENT_GAP_MS = 1_000
MAX_EVENT_GAP_MS = 300_000


class EventGenerator:
    """
    Generates synthetic user event sequences.

    The generator:
    - Opens every sequence with a page view or a search
    - Walks the cart/checkout state machine with configured probabilities
    - Splits a user's events into sessions with strictly increasing timestamps
    - Adds purely anonymous visitors on top of the given profiles
    """

    def __init__(
        self,
        cfg: GeneratorSettings,
        rng: Optional[random.Random] = None,
        fake: Optional[Faker] = None,
        profiles: Optional[ProfileGenerator] = None,
        clock: Clock = utc_now,
    ) -> None:
        """
        Create a new EventGenerator.

        Args:
            cfg: Validated generator settings.
            rng: Random source for all probabilistic decisions; seeded from
                `cfg.seed` when omitted.
            fake: Faker used for identifiers and free-text fields.
            profiles: Source of synthetic anonymous identities.
            clock: Returns "now"; sequences are anchored in the 30 days before it.
        """
        self._cfg = cfg
        self._rng = rng or random.Random(cfg.seed)
        self._fake = fake or build_faker(cfg.seed)
        self._clock = clock
        self._profiles = profiles or ProfileGenerator(
            cfg, rng=self._rng, fake=self._fake, clock=clock
        )
        self._payloads = PayloadFactory(self._rng, self._fake)

        self._log = get_logger(__name__)
        self._tracer = get_tracer("cdp-datagen.generator")
        self._events_counter, _, self._sequence_length = get_generator_instruments()

    def _recent_timestamp(self) -> datetime:
        """Sample a timestamp uniformly within the last 30 days."""
        offset = self._rng.uniform(0.0, RECENT_WINDOW.total_seconds())
        return self._clock() - timedelta(seconds=offset)

    def _next_session_anchor(self, last_timestamp: datetime) -> datetime:
        """
        Anchor for a new session: between the previous event and now.

        Never earlier than `last_timestamp`, so timestamps keep increasing
        across session boundaries.
        """
        now = self._clock()
        if last_timestamp >= now:
            return last_timestamp
        gap = self._rng.uniform(0.0, (now - last_timestamp).total_seconds())
        return last_timestamp + timedelta(seconds=gap)

    def generate_sequence(self, profile: UserProfile, country: str) -> List[UserEvent]:
        """
        Generate the ordered event sequence for one user.

        Args:
            profile: Identity the events are linked to.
            country: Country stamped on every event.

        Returns:
            Events in chronological order.
        """
        events_cfg = self._cfg.events
        count_range = self._cfg.event_count_per_user

        context = EventGenerationContext(
            session_id=self._fake.uuid4(),
            base_timestamp=self._recent_timestamp(),
        )
        n_events = self._rng.randint(count_range.min, count_range.max)
        user_id = profile.id if profile.is_registered else None

        events: List[UserEvent] = []
        for index in range(n_events):
            if index > 0 and not bernoulli(
                self._rng, events_cfg.session_continuation_probability
            ):
                context.start_session(
                    session_id=self._fake.uuid4(),
                    base_timestamp=self._next_session_anchor(events[-1].timestamp),
                )

            event_type = next_event_type(context, index, events_cfg, self._rng)
            apply_event(context, event_type)
            payload = self._payloads.build(event_type, context)

            context.elapsed_ms += self._rng.randint(MIN_EVENT_GAP_MS, MAX_EVENT_GAP_MS)
            timestamp = context.base_timestamp + timedelta(milliseconds=context.elapsed_ms)

            events.append(
                UserEvent(
                    id=self._fake.uuid4(),
                    user_id=user_id,
                    cookie_id=profile.cookie_id,
                    maid_id=profile.maid_id,
                    event_type=event_type,
                    event_data=payload,
                    timestamp=timestamp,
                    country=country,
                )
            )
            self._events_counter.add(1, {"event_type": event_type.value})

        self._sequence_length.record(len(events))
        return events

    def generate_user_events(
        self,
        profiles: Sequence[UserProfile],
        country: str,
    ) -> List[UserEvent]:
        """
        Generate events for every profile plus purely anonymous visitors.

        The number of extra anonymous identities is drawn from
        `anonymous_user_count`. Results are concatenated in insertion order:
        each user's events are chronological, with no ordering across users.

        Args:
            profiles: Known user profiles (registered or anonymous).
            country: Country stamped on every event.

        Returns:
            All generated events.
        """
        anonymous_range = self._cfg.anonymous_user_count
        n_anonymous = self._rng.randint(anonymous_range.min, anonymous_range.max)
        identities = list(profiles) + [
            self._profiles.anonymous_identity() for _ in range(n_anonymous)
        ]

        events: List[UserEvent] = []
        for profile in identities:
            with self._tracer.start_as_current_span("generate_user_events") as span:
                sequence = self.generate_sequence(profile, country)
                span.set_attribute("profile_type", profile.profile_type.value)
                span.set_attribute("event_count", len(sequence))
            events.extend(sequence)
            self._log.debug(
                "Generated user event sequence.",
                extra={
                    "profile_type": profile.profile_type.value,
                    "event_count": len(sequence),
                },
            )

        self._log.info(
            "Generated user events.",
            extra={
                "profiles": len(profiles),
                "anonymous_visitors": n_anonymous,
                "events": len(events),
            },
        )
        return events

    @staticmethod
    def count_by_type(events: Sequence[UserEvent]) -> Dict[str, int]:
        """Count events per event type value (types with no events are omitted)."""
        return dict(Counter(event.event_type.value for event in events))
