"""OpenTelemetry setup for the engines.

Spans come from @traced on every engine operation. The provider is built once
from Settings. SQL instrumentation is attached lazily when the engine is
created (see persistence.database).
"""

import logging
import threading

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from agora.core.config import Settings

logger = logging.getLogger(__name__)

EXPORTERS = ("console", "otlp", "none")


def _build_exporter(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Return the span exporter for kind; None means spans are recorded but not shipped."""
    if kind == "none":
        return None
    if kind == "otlp":
        if not otlp_endpoint:
            logger.warning("OTLP exporter selected without an endpoint; falling back to console")
            return ConsoleSpanExporter()
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if kind != "console":
        logger.warning("Unknown telemetry exporter %r (expected one of %s)", kind, EXPORTERS)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentors attached to it."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.tracer_provider: TracerProvider | None = None
        self._sql_instrumented = False

    @property
    def active(self) -> bool:
        return self.tracer_provider is not None

    def setup_telemetry(self) -> TracerProvider | None:
        """Create and register the global tracer provider.

        Returns None when telemetry is disabled or the provider could not be
        built; the engines then run with the no-op tracer.
        """
        settings = self.settings
        if not settings.telemetry_enabled:
            logger.info("Telemetry disabled")
            return None
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: settings.app_name,
                        SERVICE_VERSION: settings.app_version,
                        "deployment.environment": settings.telemetry_environment,
                    }
                ),
                sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_rate)),
            )
            exporter = _build_exporter(
                settings.telemetry_exporter, settings.telemetry_otlp_endpoint
            )
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception as e:
            logger.exception("Telemetry setup failed, continuing without tracing: %s", e)
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled for %s %s (exporter=%s, sample_rate=%s)",
            settings.app_name,
            settings.app_version,
            settings.telemetry_exporter,
            settings.telemetry_sample_rate,
        )
        return provider

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Trace repository queries. Applied at most once per process."""
        if not self.active or self._sql_instrumented:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=self.tracer_provider,
                enable_commenter=True,
            )
        except Exception as e:
            logger.exception("SQLAlchemy instrumentation failed: %s", e)
            return
        self._sql_instrumented = True

    def instrument_logging(self) -> None:
        """Inject trace_id/span_id into log records, decision lines included."""
        if not self.active:
            return
        try:
            LoggingInstrumentor().instrument(
                tracer_provider=self.tracer_provider, set_logging_format=True
            )
        except Exception as e:
            logger.exception("Logging instrumentation failed: %s", e)

    def shutdown(self) -> None:
        """Flush pending spans."""
        if not self.active:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception as e:
            logger.exception("Telemetry shutdown failed: %s", e)
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry


def configure_telemetry(settings: Settings) -> TelemetryConfig:
    """Set up tracing from settings and register it for the engine factory."""
    telemetry = TelemetryConfig(settings)
    telemetry.setup_telemetry()
    telemetry.instrument_logging()
    set_telemetry(telemetry)
    return telemetry
