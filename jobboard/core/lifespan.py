"""Application lifespan: startup and shutdown.

Wiring of infrastructure only (tag store, telemetry, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from jobboard.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, tag store (Redis if enabled, otherwise
    in-process), telemetry (if enabled). Shutdown order: tag store
    disconnect, telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    from jobboard.shared.telemetry.logging import setup_logging

    setup_logging()

    if settings.redis_enabled:
        from jobboard.infrastructure.cache.redis_tag_store import RedisTagStore

        store = RedisTagStore(settings=settings)
        await store.connect()
        app.state.tag_store = store
    else:
        from jobboard.infrastructure.cache.memory_tag_store import InMemoryTagStore

        # Single-process only: other workers never see these invalidations.
        app.state.tag_store = InMemoryTagStore()
        logger.info("Redis disabled; using in-process tag store")

    if settings.telemetry_enabled:
        from jobboard.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        if settings.redis_enabled:
            telemetry.instrument_redis()
        telemetry.instrument_logging()
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    store = getattr(app.state, "tag_store", None)
    if store is not None and hasattr(store, "disconnect"):
        await store.disconnect()
    app.state.tag_store = None

    from jobboard.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    from jobboard.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
