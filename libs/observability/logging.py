"""
Structured JSON logging with OpenTelemetry Log Exporter.

This module configures:
- stderr JSON logs (stdout is reserved for generated NDJSON records)
- OpenTelemetry log pipeline (LoggerProvider + LogExporter)
- Trace/span correlation in every log line
"""

import json
import logging
import sys
from typing import Any, Dict, FrozenSet, Optional, TextIO

from opentelemetry import trace
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor

from libs.observability.otlp_exporter import build_log_exporter
from libs.observability.resource import (
    ENVIRONMENT,
    SERVICE_NAME_VALUE,
    build_resource,
)

# Attributes every LogRecord carries; anything else came in through `extra=`.
_STANDARD_RECORD_ATTRS: FrozenSet[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


class JsonTraceFormatter(logging.Formatter):
    """
    JSON formatter including trace_id and span_id.

    The formatter emits a single-line JSON object with:
        - level
        - logger
        - message
        - time
        - trace_id (hex) if available
        - span_id (hex) if available
        - service
        - additional contextual fields passed through `extra=`.
    """

    def __init__(self, service_name: str = SERVICE_NAME_VALUE) -> None:
        super().__init__()
        self._service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        span = trace.get_current_span()
        span_ctx = span.get_span_context() if span else None

        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "trace_id": (
                f"{span_ctx.trace_id:032x}" if span_ctx and span_ctx.is_valid else None
            ),
            "span_id": (
                f"{span_ctx.span_id:016x}" if span_ctx and span_ctx.is_valid else None
            ),
            "service": self._service_name,
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key.startswith("_") or key in payload or key in _STANDARD_RECORD_ATTRS:
                continue
            try:
                json.dumps({key: value})
            except (TypeError, ValueError):
                value = repr(value)
            payload[key] = value

        return json.dumps(payload, separators=(",", ":"))


def init_logging(
    level: int = logging.INFO,
    service_name: str = SERVICE_NAME_VALUE,
    resource_attributes: str = ENVIRONMENT,
    otlp_endpoint: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure the root logger for the current process.

    This sets up:
        - JSON stderr logger
        - OpenTelemetry log pipeline via OTLP
        - Trace correlation via LoggingHandler

    Args:
        level: Minimum log level for the root logger.
        service_name: Service name reported in log lines and the resource.
        resource_attributes: Extra resource attributes (``k=v,k=v``).
        otlp_endpoint: Collector endpoint override.
        stream: Stream for JSON lines; defaults to stderr.
    """
    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(JsonTraceFormatter(service_name))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stream_handler)
    root.setLevel(level)

    logger_provider = LoggerProvider(
        resource=build_resource(service_name, resource_attributes)
    )
    logger_provider.add_log_record_processor(
        BatchLogRecordProcessor(build_log_exporter(otlp_endpoint))
    )

    # OpenTelemetry log handler for root logger
    otel_handler = LoggingHandler(level=level, logger_provider=logger_provider)
    root.addHandler(otel_handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a module- or service-level logger.

    This helper is the canonical way for application code to obtain a logger.

    Args:
        name: Optional logger name. If None, the root logger is returned.

    Returns:
        A Logger instance.
    """
    return logging.getLogger(name)
