"""
Bootstrap wiring for the generator service.

Responsible for:
- Loading the global AppConfig and GeneratorSettings
- Sharing one seeded random source between the generators
- Constructing the GenerationService with its dependencies
"""

import random
from typing import Final, Optional, TextIO

from apps.generator.src.core.config import GeneratorSettings, get_generator_settings
from apps.generator.src.infra.generator import EventGenerator
from apps.generator.src.infra.profiles import ProfileGenerator
from apps.generator.src.infra.randomness import build_faker
from apps.generator.src.infra.sink import NdjsonSink
from apps.generator.src.service.generation_service import GenerationService
from libs.config import AppConfig
from libs.observability import get_logger


def build_service(
    stream: TextIO, profile_stream: Optional[TextIO] = None
) -> GenerationService:
    """
    Build a fully wired GenerationService writing events to `stream`.

    Profiles go to `profile_stream` when one is given.

    Returns:
        GenerationService: Ready-to-run service instance.
    """
    log = get_logger("generator-bootstrap")

    app_cfg: Final[AppConfig] = AppConfig.load()
    generator_cfg: Final[GeneratorSettings] = get_generator_settings()

    rng = random.Random(generator_cfg.seed)
    fake = build_faker(generator_cfg.seed)

    profile_generator = ProfileGenerator(generator_cfg, rng=rng, fake=fake)
    event_generator = EventGenerator(
        generator_cfg,
        rng=rng,
        fake=fake,
        profiles=profile_generator,
    )

    service = GenerationService(
        app_config=app_cfg,
        generator_cfg=generator_cfg,
        profile_generator=profile_generator,
        event_generator=event_generator,
        sink=NdjsonSink(stream),
        logger=get_logger("GenerationService"),
        profile_sink=NdjsonSink(profile_stream) if profile_stream is not None else None,
    )

    log.info(
        "Generator service initialized.",
        extra={"country": generator_cfg.country, "seed": generator_cfg.seed},
    )
    return service
