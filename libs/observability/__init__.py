"""
Public observability interface for the data generator.

This module exposes stable entrypoints for:
- logging
- tracing
- metrics
- generator metric instruments

Application code should import from here instead of the underlying modules
to keep the internal implementation swappable.
"""

from .instrumentation import get_generator_instruments, init_observability
from .logging import JsonTraceFormatter, get_logger, init_logging
from .metrics import get_meter, init_metrics, shutdown_metrics
from .tracing import get_tracer, init_tracing

__all__ = [
    "init_observability",
    "init_logging",
    "init_tracing",
    "init_metrics",
    "shutdown_metrics",
    "get_logger",
    "get_tracer",
    "get_meter",
    "get_generator_instruments",
    "JsonTraceFormatter",
]
