"""Health check endpoint. No database access; used for liveness checks."""

from fastapi import APIRouter, Request

from jobboard.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok status and which tag store backs the cache."""
    store = getattr(request.app.state, "tag_store", None)
    if store is None:
        return HealthResponse()
    if hasattr(store, "is_available"):
        return HealthResponse(cache="redis" if store.is_available() else "unavailable")
    return HealthResponse(cache="memory")
