"""Tracing for container runs.

The runner opens ``engine.ping``, ``image.pull`` and ``container.run``
spans through :func:`get_tracer`.  Until :func:`configure_telemetry`
installs a tracer provider, the OpenTelemetry API hands out no-op spans,
so only ``opentelemetry-api`` is needed at runtime.  Exporting spans
requires the ``otel`` extra (``pip install boxrun[otel]``).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace
from pydantic import BaseModel

# Span attribute keys
ATTR_IMAGE = "boxrun.image"
ATTR_ARGS_COUNT = "boxrun.args.count"
ATTR_USER = "boxrun.user"
ATTR_PULL_SKIPPED = "boxrun.pull.skipped"
ATTR_PULL_CHUNKS = "boxrun.pull.chunks"
ATTR_STATUS_CODE = "boxrun.status_code"
ATTR_ERROR_KIND = "boxrun.error.kind"

_INSTRUMENTATION_NAME = "boxrun"


class TelemetrySettings(BaseModel):
    """Span export for a job.

    Spans go to the OTLP collector at ``otlp_endpoint`` when it is set,
    otherwise they are printed to stdout as JSON.
    """

    enabled: bool = False
    otlp_endpoint: str | None = None


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return the tracer for *name* (no-op until telemetry is configured)."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def record_error_kind(span: trace.Span, exc: BaseException) -> None:
    """Tag *span* with the class name of the failure that ended it."""
    span.set_attribute(ATTR_ERROR_KIND, type(exc).__name__)


def configure_telemetry(settings: TelemetrySettings, *, service_name: str = "boxrun") -> bool:
    """Install a tracer provider exporting spans as *settings* describe.

    Returns ``False`` without touching the global provider when
    ``settings.enabled`` is off.

    Raises:
        ImportError: ``opentelemetry-sdk`` (or, for OTLP export,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    if not settings.enabled:
        return False

    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for telemetry. Install it with: pip install boxrun[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(_span_processor(settings))
    trace.set_tracer_provider(provider)
    return True


def _span_processor(settings: TelemetrySettings) -> Any:
    """Batch spans to an OTLP collector, or print each one to stdout."""
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    if settings.otlp_endpoint is None:
        return SimpleSpanProcessor(ConsoleSpanExporter())

    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = "opentelemetry-exporter-otlp is required to export to an OTLP endpoint. Install it with: pip install boxrun[otel]"
        raise ImportError(msg) from exc

    return BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint))
