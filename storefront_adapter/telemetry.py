"""OpenTelemetry helpers for upstream request metrics."""

from opentelemetry import metrics
from opentelemetry.metrics import Histogram
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader


_meter_provider_initialized = False


def init_metrics() -> None:
    """Initialize OpenTelemetry metrics with a console exporter."""
    global _meter_provider_initialized
    if _meter_provider_initialized:
        return
    reader = PeriodicExportingMetricReader(ConsoleMetricExporter())
    provider = MeterProvider(metric_readers=[reader])
    metrics.set_meter_provider(provider)
    _meter_provider_initialized = True


def get_request_duration_histogram() -> Histogram:
    """
    Return a histogram for upstream request durations.

    Records go to whatever meter provider the host application installed
    (a no-op provider unless one was set or ``init_metrics`` ran).
    """
    meter = metrics.get_meter("storefront_adapter")
    return meter.create_histogram(
        name="storefront.upstream.request.duration",
        unit="ms",
        description="Duration of storefront backend requests",
    )
