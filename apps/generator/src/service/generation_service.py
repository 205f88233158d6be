"""
Batch generation service.

Responsibilities:
- Generate user profiles for the configured country
- Generate causally consistent event sequences for them
- Write the profiles and events to their NDJSON sinks
- Emit metrics and a run summary
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from pydantic import BaseModel, Field

from apps.generator.src.core.config import GeneratorSettings
from apps.generator.src.infra.generator import EventGenerator
from apps.generator.src.infra.profiles import (
    ProfileGenerator,
    profile_statistics,
    resolve_country,
)
from apps.generator.src.infra.sink import NdjsonSink
from libs.config import AppConfig
from libs.observability import get_generator_instruments, get_tracer


class GenerationSummary(BaseModel):
    """Outcome of one generation run."""

    country: str
    profiles: int
    registered: int
    anonymous: int
    with_mobile_id: int
    profiles_written: int = 0
    events: int
    event_type_counts: Dict[str, int] = Field(default_factory=dict)


class GenerationService:
    """
    One-shot service producing a synthetic CDP dataset.

    The service owns no randomness itself; profile and event generators are
    injected already seeded, so a run is reproducible end to end.
    """

    def __init__(
        self,
        app_config: AppConfig,
        generator_cfg: GeneratorSettings,
        profile_generator: ProfileGenerator,
        event_generator: EventGenerator,
        sink: NdjsonSink,
        logger: logging.Logger,
        profile_sink: Optional[NdjsonSink] = None,
    ) -> None:
        """
        Create a new GenerationService.

        Args:
            app_config: Global application configuration.
            generator_cfg: Generator-specific settings.
            profile_generator: Source of user profiles.
            event_generator: Event sequence generator.
            sink: Destination for generated events.
            logger: Logger instance.
            profile_sink: Destination for generated profiles; profiles are
                not written when omitted.
        """
        self._app_cfg = app_config
        self._cfg = generator_cfg
        self._profiles = profile_generator
        self._events = event_generator
        self._sink = sink
        self._log = logger
        self._profile_sink = profile_sink

        self._tracer = get_tracer("cdp-datagen.service")
        _, self._profiles_counter, _ = get_generator_instruments()

    def run(self) -> GenerationSummary:
        """
        Generate profiles and events, write both, and summarize the run.

        Returns:
            GenerationSummary: counts for the generated dataset.
        """
        country = resolve_country(self._cfg.country).name

        with self._tracer.start_as_current_span("generate_dataset") as span:
            span.set_attribute("country", country)
            span.set_attribute("user_count", self._cfg.user_count)
            self._log.info(
                "Generation started.",
                extra={
                    "country": country,
                    "user_count": self._cfg.user_count,
                    "seed": self._cfg.seed,
                },
            )

            profiles = self._profiles.generate_profiles(
                self._cfg.user_count, self._cfg.country
            )
            for profile in profiles:
                self._profiles_counter.add(
                    1, {"profile_type": profile.profile_type.value}
                )

            profiles_written = 0
            if self._profile_sink is not None:
                profiles_written = self._profile_sink.write_all(profiles)
            span.set_attribute("profiles_written", profiles_written)

            events = self._events.generate_user_events(profiles, self._cfg.country)
            written = self._sink.write_all(events)
            span.set_attribute("event_count", written)

        stats = profile_statistics(profiles)
        summary = GenerationSummary(
            country=country,
            profiles=stats.total,
            registered=stats.registered,
            anonymous=stats.anonymous,
            with_mobile_id=stats.with_mobile_id,
            profiles_written=profiles_written,
            events=written,
            event_type_counts=EventGenerator.count_by_type(events),
        )

        if self._app_cfg.service.show_summary:
            self._log.info("Generation summary.", extra=summary.model_dump())
        return summary
