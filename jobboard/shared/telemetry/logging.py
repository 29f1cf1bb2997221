"""Root logging setup and the get_logger accessor used across the package."""

import logging
import sys

from jobboard.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TRACED_LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s "
    "[trace_id=%(otelTraceID)s span_id=%(otelSpanID)s] - %(message)s"
)
TRACE_FIELDS = ("otelTraceID", "otelSpanID")


class TraceContextDefaults(logging.Filter):
    """Give records logged outside a span (or before instrumentation) zero ids."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in TRACE_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "0")
        return True


def build_log_handler(traced: bool) -> logging.Handler:
    """Stdout handler; with trace ids in the line when tracing is on."""
    handler = logging.StreamHandler(sys.stdout)
    if traced:
        handler.addFilter(TraceContextDefaults())
        handler.setFormatter(logging.Formatter(TRACED_LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging() -> None:
    """Configure the root logger once per process (DEBUG when settings.debug)."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        handlers=[build_log_handler(settings.telemetry_enabled)],
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
