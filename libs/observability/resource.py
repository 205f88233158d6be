"""
OpenTelemetry resource shared by the log, trace and metric pipelines.
"""

import os
from typing import Dict

from opentelemetry.sdk.resources import Resource
from opentelemetry.semconv.attributes.service_attributes import SERVICE_NAME

SERVICE_NAME_VALUE: str = os.getenv("OTEL_SERVICE_NAME", "cdp-datagen")
ENVIRONMENT: str = os.getenv(
    "OTEL_RESOURCE_ATTRIBUTES",
    "deployment.environment=local",
)


def parse_resource_attributes(raw: str) -> Dict[str, str]:
    """
    Parse a ``key=value,key=value`` attribute list.

    Entries without ``=`` are ignored.
    """
    return {
        kv.split("=", 1)[0].strip(): kv.split("=", 1)[1].strip()
        for kv in raw.split(",")
        if "=" in kv
    }


def build_resource(
    service_name: str = SERVICE_NAME_VALUE,
    resource_attributes: str = ENVIRONMENT,
) -> Resource:
    """
    Build the Resource describing this process.

    Args:
        service_name: Value for the ``service.name`` attribute.
        resource_attributes: Extra attributes as ``key=value`` pairs.

    Returns:
        A Resource instance.
    """
    attrs = parse_resource_attributes(resource_attributes)
    return Resource.create({SERVICE_NAME: service_name, **attrs})
