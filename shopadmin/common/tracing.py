"""OpenTelemetry setup helpers for the admin CLI."""

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from shopadmin.common.config import settings


def setup_tracing(service_name: str) -> TracerProvider | None:
    """Register a tracer provider with OTLP HTTP exporter if an endpoint is set."""

    if not settings.otel_exporter_otlp_endpoint:
        return None
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    exporter = OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return provider


def shutdown_tracing(provider: TracerProvider | None) -> None:
    """Flush pending spans before the process exits."""

    if provider is not None:
        provider.shutdown()


tracer = trace.get_tracer("shopadmin")
