"""
TaskDesk OpenTelemetry Setup

- Tracer provider tagged with the service name
- OTLP span export when an endpoint is configured
- Span helper for task client operations
"""
from __future__ import annotations
from typing import Any, Optional
import os

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def setup_otel(
    service_name: str = "taskdesk",
    endpoint: Optional[str] = None,
) -> trace.Tracer:
    """Initialize OpenTelemetry; export over OTLP when an endpoint is set."""
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    otlp_endpoint = endpoint or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    return trace.get_tracer(service_name)


def task_span_attributes(operation: str, task_id: str | None = None) -> dict[str, Any]:
    """Standard span attributes for a task operation."""
    attrs: dict[str, Any] = {"task.operation": operation}
    if task_id:
        attrs["task.id"] = task_id
    return attrs
