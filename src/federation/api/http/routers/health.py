"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.federation.api.http.deps import get_app_dependencies
from src.federation.api.http.app_data import ApplicationDependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is running."""
    return {"status": "healthy", "service": "federation"}


@router.get("/ready", response_model=None)
def readiness(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: checks the database and reports the registry size."""
    db_healthy = deps.database_service.health_check()
    body = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": {
            "database": {"status": "healthy" if db_healthy else "unhealthy"},
            "registry": {
                "status": "healthy",
                "entries": len(deps.provider_factory.registry),
            },
        },
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
