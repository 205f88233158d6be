"""
OpenTelemetry tracing initialization and tracer helper.
"""

from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Tracer

from libs.observability.otlp_exporter import build_trace_exporter
from libs.observability.resource import (
    ENVIRONMENT,
    SERVICE_NAME_VALUE,
    build_resource,
)

_provider: Optional[TracerProvider] = None


def init_tracing(
    service_name: str = SERVICE_NAME_VALUE,
    resource_attributes: str = ENVIRONMENT,
    otlp_endpoint: Optional[str] = None,
) -> None:
    """
    Initialize the global TracerProvider and configure the OTLP span exporter.

    This function is idempotent; calling it multiple times will reuse the
    same global TracerProvider.
    """
    global _provider
    if _provider is not None:
        return

    provider = TracerProvider(
        resource=build_resource(service_name, resource_attributes)
    )
    provider.add_span_processor(BatchSpanProcessor(build_trace_exporter(otlp_endpoint)))
    trace.set_tracer_provider(provider)
    _provider = provider


def get_tracer(name: str | None = None) -> Tracer:
    """
    Get a Tracer instance for the given instrumentation scope.

    Args:
        name: Logical scope name for the tracer. If None, the service name is used.

    Returns:
        A Tracer instance.
    """
    scope_name = name or SERVICE_NAME_VALUE
    return trace.get_tracer(scope_name)
