"""API v1 router aggregation.

All routes use dependencies from jobboard.api.v1.dependencies (no manual
repository or use case construction).
"""

from fastapi import APIRouter

from jobboard.api.v1.endpoints import health, job_listings, webhooks

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(webhooks.router, prefix="/webhooks", tags=["webhooks"])
api_router.include_router(
    job_listings.router, prefix="/organizations", tags=["job-listings"]
)
