"""
Observability bootstrap utilities for logging, tracing, and metrics.

This module provides:
- a unified initialization entrypoint (`init_observability`)
- stable metric instruments for the profile/event generators
"""

import logging
from typing import Optional, Tuple

from opentelemetry.metrics import Counter, Histogram

from libs.config import OTELConfig
from libs.observability.logging import init_logging
from libs.observability.metrics import get_meter, init_metrics
from libs.observability.tracing import init_tracing


def init_observability(
    level: int = logging.INFO,
    otel: Optional[OTELConfig] = None,
) -> None:
    """
    Initialize logging, tracing, and metrics for the current process.

    This should be called once during startup (e.g. in `main()`).

    Args:
        level: Logging verbosity level for the root logger.
        otel: OTEL settings; defaults to the OTEL_* environment variables.
    """
    otel = otel or OTELConfig()
    kwargs = {
        "service_name": otel.service_name,
        "resource_attributes": otel.resource_attributes,
        "otlp_endpoint": otel.otlp_endpoint,
    }
    init_logging(level=level, **kwargs)
    init_tracing(**kwargs)
    init_metrics(**kwargs)


def get_generator_instruments() -> Tuple[Counter, Counter, Histogram]:
    """
    Create OpenTelemetry instruments for the data generators.

    Returns:
        A tuple containing:
            events_counter: Counter of generated events (attribute `event_type`).
            profiles_counter: Counter of generated profiles (attribute `profile_type`).
            sequence_length_hist: Histogram of events per user sequence.
    """
    meter = get_meter()

    events_counter: Counter = meter.create_counter(
        name="cdp_events_generated",
        description="Count of generated user events",
        unit="1",
    )

    profiles_counter: Counter = meter.create_counter(
        name="cdp_profiles_generated",
        description="Count of generated user profiles",
        unit="1",
    )

    sequence_length_hist: Histogram = meter.create_histogram(
        name="cdp_event_sequence_length",
        description="Number of events generated per user sequence",
        unit="1",
    )

    return events_counter, profiles_counter, sequence_length_hist
