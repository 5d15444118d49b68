import os

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def _resource(service_name: str, service_version: str, resource_attributes: dict | None) -> Resource:
    resource_attrs = {
        SERVICE_NAME: service_name,
        SERVICE_VERSION: service_version,
        "deployment.environment": os.getenv("ENV", "development"),
    }
    if resource_attributes:
        resource_attrs.update(resource_attributes)
    return Resource.create(resource_attrs)


def init_tracing(
    service_name: str,
    service_version: str = "1.0.0",
    endpoint: str | None = None,
    resource_attributes: dict | None = None,
) -> bool:
    """
    Initialize OpenTelemetry tracing

    Args:
        service_name: Name of the service
        service_version: Version of the service
        endpoint: OTLP endpoint URL, falls back to OTEL_EXPORTER_OTLP_ENDPOINT
        resource_attributes: Additional resource attributes

    Returns:
        True when an exporting tracer provider was installed
    """
    endpoint = endpoint or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        # No endpoint configured, keep the no-op tracer of the API
        return False

    tracer_provider = TracerProvider(resource=_resource(service_name, service_version, resource_attributes))
    otlp_exporter = OTLPSpanExporter(
        endpoint=endpoint,
        insecure=endpoint.startswith("http://"),
    )
    tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(tracer_provider)
    return True


def init_metrics(
    service_name: str,
    service_version: str = "1.0.0",
    endpoint: str | None = None,
    resource_attributes: dict | None = None,
    export_interval: int = 60,
) -> bool:
    """
    Initialize OpenTelemetry metrics

    Args:
        service_name: Name of the service
        service_version: Version of the service
        endpoint: OTLP endpoint URL, falls back to OTEL_EXPORTER_OTLP_ENDPOINT
        resource_attributes: Additional resource attributes
        export_interval: Metrics export interval in seconds

    Returns:
        True when an exporting meter provider was installed
    """
    endpoint = endpoint or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        return False

    metric_exporter = OTLPMetricExporter(
        endpoint=endpoint,
        insecure=endpoint.startswith("http://"),
    )
    metric_reader = PeriodicExportingMetricReader(
        exporter=metric_exporter,
        export_interval_millis=export_interval * 1000,
    )
    meter_provider = MeterProvider(
        resource=_resource(service_name, service_version, resource_attributes),
        metric_readers=[metric_reader],
    )

    metrics.set_meter_provider(meter_provider)
    return True


def init_instrumentation(
    app=None,
    instrument_fastapi: bool = True,
    instrument_httpx: bool = True,
) -> None:
    """
    Initialize automatic instrumentation

    Args:
        app: FastAPI app instance to instrument
        instrument_fastapi: Generate server spans for incoming requests
        instrument_httpx: Propagate trace context on outgoing httpx calls
    """
    if instrument_fastapi and app is not None:
        FastAPIInstrumentor.instrument_app(app)

    if instrument_httpx:
        HTTPXClientInstrumentor().instrument()


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Get a tracer instance"""
    return trace.get_tracer(name or __name__)


def get_meter(name: str | None = None) -> metrics.Meter:
    """Get a meter instance"""
    return metrics.get_meter(name or __name__)


def setup_telemetry(
    service_name: str,
    service_version: str = "1.0.0",
    app=None,
    endpoint: str | None = None,
    enable_tracing: bool = True,
    enable_metrics: bool = True,
    enable_instrumentation: bool = True,
) -> None:
    """
    Setup complete telemetry stack

    Args:
        service_name: Name of the service
        service_version: Version of the service
        app: FastAPI app to instrument
        endpoint: OTLP collector endpoint
        enable_tracing: Enable tracing
        enable_metrics: Enable metrics
        enable_instrumentation: Enable auto-instrumentation
    """
    if enable_tracing:
        init_tracing(service_name, service_version, endpoint)

    if enable_metrics:
        init_metrics(service_name, service_version, endpoint)

    if enable_instrumentation:
        init_instrumentation(app=app, instrument_fastapi=app is not None)
