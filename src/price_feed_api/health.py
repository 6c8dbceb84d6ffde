from typing import Any

from fastapi import APIRouter, HTTPException, Request

from price_feed import __version__
from price_feed.infrastructure.observability import get_api_logger

logger = get_api_logger("health")

router = APIRouter()


async def check_database(request: Request) -> bool:
    """Check database connectivity when a store is configured."""
    container = getattr(request.app.state, "container", None)
    if container is None or not container.settings.database.url:
        return False
    try:
        rows = await container.create_database().fetch_all("SELECT 1 AS ok")
        return bool(rows)
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e))
        return False


def check_provider_credentials(request: Request) -> bool:
    container = getattr(request.app.state, "container", None)
    return bool(container is not None and container.settings.finnhub.api_key)


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """Comprehensive health check endpoint."""
    health_status = {
        "status": "healthy",
        "services": {
            "database": await check_database(request),
            "finnhub_credentials": check_provider_credentials(request),
        },
        "version": __version__,
    }

    if not all(health_status["services"].values()):
        health_status["status"] = "unhealthy"
        raise HTTPException(status_code=503, detail=health_status)

    return health_status


@router.get("/ready")
async def readiness_check() -> dict[str, Any]:
    """Readiness check for Kubernetes."""
    return {"status": "ready"}
