"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.deps import get_app_dependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is serving requests."""
    return {"status": "healthy", "service": "api"}


@router.get("/ready", response_model=None)
async def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: checks MongoDB and the S3 bucket.

    Returns 200 if both are reachable, 503 otherwise.
    """
    database_healthy = await app_deps.database_service.health_check()
    storage_healthy = await app_deps.image_storage.health_check()

    checks = {
        "database": {
            "status": "healthy" if database_healthy else "unhealthy",
            "type": "mongodb",
        },
        "storage": {
            "status": "healthy" if storage_healthy else "unhealthy",
            "type": "s3",
            "bucket": app_deps.image_storage.bucket_name,
        },
    }
    all_healthy = database_healthy and storage_healthy

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": app_deps.config.app.environment,
        "checks": checks,
    }
    if not all_healthy:
        return JSONResponse(status_code=503, content=response)
    return response
