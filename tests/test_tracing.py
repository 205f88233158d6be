"""Tests for tracing initialization."""

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from libs.observability import tracing

ATTRS = "deployment.environment=test"


class TestInitTracing:
    """Provider setup happens once per process."""

    @pytest.fixture
    def installed(self, monkeypatch):
        providers = []
        monkeypatch.setattr(tracing, "_provider", None)
        monkeypatch.setattr(
            tracing, "build_trace_exporter", lambda endpoint: InMemorySpanExporter()
        )
        monkeypatch.setattr(tracing.trace, "set_tracer_provider", providers.append)
        return providers

    def test_second_call_reuses_provider(self, installed):
        tracing.init_tracing(service_name="datagen-test", resource_attributes=ATTRS)
        first = tracing._provider
        tracing.init_tracing(service_name="other", resource_attributes=ATTRS)

        assert len(installed) == 1
        assert isinstance(first, TracerProvider)
        assert tracing._provider is first

    def test_resource_carries_service_name(self, installed):
        tracing.init_tracing(service_name="datagen-test", resource_attributes=ATTRS)
        assert installed[0].resource.attributes["service.name"] == "datagen-test"
