"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, rate limiting, middleware, routers.
See jobboard.core.lifespan and jobboard.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from jobboard.api.v1 import api_router
from jobboard.core.config import get_settings
from jobboard.core.exception_handlers import register_exception_handlers
from jobboard.core.lifespan import create_lifespan
from jobboard.core.limiter import limiter
from jobboard.middleware import RequestIDMiddleware, RequestSizeLimitMiddleware


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # First added = innermost. Size limit runs before the request ID is assigned.
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_body_bytes)

    app.include_router(api_router, prefix="/api/v1")

    return app
