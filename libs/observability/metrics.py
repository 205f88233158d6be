"""
Metrics initialization and meter provider for OpenTelemetry.

This module initializes a process-wide MeterProvider and exposes
a helper to retrieve the default Meter for the current service.

Until `init_metrics` runs, `get_meter` returns the API's proxy meter, so
instruments created by library code are safe no-ops in tests and scripts.
"""

from typing import Optional

from opentelemetry import metrics
from opentelemetry.metrics import Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader

from libs.observability.otlp_exporter import build_metric_exporter
from libs.observability.resource import (
    ENVIRONMENT,
    SERVICE_NAME_VALUE,
    build_resource,
)

_provider: Optional[MeterProvider] = None
_meter_scope: str = SERVICE_NAME_VALUE


def init_metrics(
    service_name: str = SERVICE_NAME_VALUE,
    resource_attributes: str = ENVIRONMENT,
    otlp_endpoint: Optional[str] = None,
) -> None:
    """
    Initialize the OTel MeterProvider and register an OTLP metric exporter.

    This function is idempotent; calling it multiple times will reuse the
    same global MeterProvider.
    """
    global _provider, _meter_scope

    if _provider is not None:
        return

    reader = PeriodicExportingMetricReader(build_metric_exporter(otlp_endpoint))
    _provider = MeterProvider(
        resource=build_resource(service_name, resource_attributes),
        metric_readers=[reader],
    )
    _meter_scope = service_name
    metrics.set_meter_provider(_provider)


def get_meter() -> Meter:
    """
    Retrieve the default Meter for the current service.

    Returns:
        A Meter instance tied to the global MeterProvider.
    """
    return metrics.get_meter(_meter_scope)


def shutdown_metrics() -> None:
    """Flush and shut down the MeterProvider, if one was initialized."""
    if _provider is not None:
        _provider.shutdown()
