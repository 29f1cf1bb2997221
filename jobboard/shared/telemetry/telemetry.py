"""OpenTelemetry tracing for the API process.

Spans go to stdout (console) or an OTLP gRPC collector. Instrumented:
FastAPI requests, SQLAlchemy queries, the Redis tag store and log records.
"""

import logging
import threading
from collections.abc import Callable

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

# Requests to these paths get no FastAPI span.
UNTRACED_URLS = "/api/v1/health"


def build_span_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter:
    """Exporter for TELEMETRY_EXPORTER ("console" or "otlp").

    Raises:
        ValueError: Unknown exporter, or "otlp" without an endpoint.
    """
    if exporter_type == "console":
        return ConsoleSpanExporter()
    if exporter_type == "otlp":
        if not otlp_endpoint:
            raise ValueError("TELEMETRY_OTLP_ENDPOINT is required for the otlp exporter")
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    raise ValueError(f"Unknown telemetry exporter: {exporter_type!r}")


class TelemetryConfig:
    """Tracer provider plus the instrumentations hung off it."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider:
        """Create the provider and install it globally.

        Raises ValueError on a bad exporter setting (see build_span_exporter).
        """
        exporter = build_span_exporter(exporter_type, otlp_endpoint)
        provider = TracerProvider(
            resource=Resource(
                attributes={
                    SERVICE_NAME: self.service_name,
                    SERVICE_VERSION: self.service_version,
                    "deployment.environment": self.environment,
                }
            ),
            sampler=TraceIdRatioBased(sample_rate),
        )
        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "Tracing %s %s via %s exporter (sample rate %s)",
            self.service_name,
            self.service_version,
            exporter_type,
            sample_rate,
        )
        return provider

    def _instrument(self, target: str, install: Callable[[TracerProvider], None]) -> bool:
        # Failures are logged, not raised.
        if self.tracer_provider is None:
            return False
        try:
            install(self.tracer_provider)
        except Exception:
            logger.exception("Could not instrument %s", target)
            return False
        return True

    def instrument_fastapi(self, app: FastAPI) -> bool:
        return self._instrument(
            "FastAPI",
            lambda provider: FastAPIInstrumentor.instrument_app(
                app, tracer_provider=provider, excluded_urls=UNTRACED_URLS
            ),
        )

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> bool:
        return self._instrument(
            "SQLAlchemy",
            lambda provider: SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=provider
            ),
        )

    def instrument_redis(self) -> bool:
        return self._instrument(
            "Redis",
            lambda provider: RedisInstrumentor().instrument(tracer_provider=provider),
        )

    def instrument_logging(self) -> bool:
        """Stamp otelTraceID / otelSpanID on log records; setup_logging owns the format."""
        return self._instrument(
            "logging",
            lambda provider: LoggingInstrumentor().instrument(
                tracer_provider=provider, set_logging_format=False
            ),
        )

    def shutdown(self) -> None:
        """Flush pending spans."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error flushing spans on shutdown")
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Telemetry installed by the lifespan, if tracing is enabled."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
