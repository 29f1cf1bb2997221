"""Tracing setup and the log format it feeds."""

import logging

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from pydantic import ValidationError

from jobboard.core.config import Settings
from jobboard.shared.telemetry.logging import TraceContextDefaults, build_log_handler
from jobboard.shared.telemetry.telemetry import TelemetryConfig, build_span_exporter


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("jobboard.test", logging.INFO, __file__, 1, msg, None, None)


def test_console_exporter() -> None:
    assert isinstance(build_span_exporter("console", None), ConsoleSpanExporter)


def test_otlp_exporter_requires_endpoint() -> None:
    with pytest.raises(ValueError, match="TELEMETRY_OTLP_ENDPOINT"):
        build_span_exporter("otlp", None)


def test_unknown_exporter_rejected() -> None:
    with pytest.raises(ValueError, match="jaeger"):
        build_span_exporter("jaeger", "http://localhost:14250")


def test_settings_reject_unknown_exporter() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, telemetry_exporter="jaeger")


def test_setup_installs_provider_and_shutdown_clears_it(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    installed: list[TracerProvider] = []
    monkeypatch.setattr(trace, "set_tracer_provider", installed.append)
    telemetry = TelemetryConfig("jobboard", "0.1.0", environment="test")

    provider = telemetry.setup_telemetry(exporter_type="console", sample_rate=0.5)

    assert installed == [provider]
    assert telemetry.tracer_provider is provider
    assert provider.resource.attributes["service.name"] == "jobboard"
    assert provider.resource.attributes["deployment.environment"] == "test"
    telemetry.shutdown()
    assert telemetry.tracer_provider is None


def test_instrumentation_skipped_before_setup() -> None:
    telemetry = TelemetryConfig("jobboard", "0.1.0")
    assert telemetry.instrument_redis() is False
    assert telemetry.instrument_logging() is False


def test_instrumentation_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    telemetry = TelemetryConfig("jobboard", "0.1.0")
    telemetry.tracer_provider = TracerProvider()

    def broken(provider: TracerProvider) -> None:
        raise RuntimeError("instrumentor exploded")

    with caplog.at_level(logging.ERROR, logger="jobboard.shared.telemetry.telemetry"):
        assert telemetry._instrument("widgets", broken) is False
    assert "Could not instrument widgets" in caplog.text
    telemetry.tracer_provider.shutdown()


def test_trace_defaults_fill_missing_ids_only() -> None:
    plain = _record()
    stamped = _record()
    stamped.otelTraceID = "abc123"

    assert TraceContextDefaults().filter(plain) is True
    TraceContextDefaults().filter(stamped)

    assert plain.otelTraceID == "0"
    assert plain.otelSpanID == "0"
    assert stamped.otelTraceID == "abc123"


def test_traced_handler_formats_records_outside_spans() -> None:
    handler = build_log_handler(traced=True)
    record = _record("webhook handled")

    assert handler.filter(record)
    line = handler.format(record)

    assert "[trace_id=0 span_id=0]" in line
    assert line.endswith("webhook handled")


def test_untraced_handler_has_no_trace_fields() -> None:
    line = build_log_handler(traced=False).format(_record("ready"))
    assert "trace_id" not in line
    assert " - INFO - ready" in line
