"""Health check endpoints for monitoring and deployment verification."""

import time

from fastapi import APIRouter, Response, status

from src.core.config import get_settings
from src.core.supabase import check_database_connection
from src.schemas.common import CheckResult, HealthResponse, HealthStatus, ReadinessResponse

router = APIRouter(tags=["health"])

API_ENDPOINTS = {
    "orders": "/api/orders",
    "products": "/api/products",
    "offers": "/api/offers",
    "reviews": "/api/reviews",
    "delivery": "/api/delivery",
    "realtime": "/ws",
}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running. Used for liveness probes.",
)
async def health_check() -> HealthResponse:
    """Return basic health status without touching dependencies."""
    return HealthResponse(status=HealthStatus.HEALTHY, environment=get_settings().app_env)


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Readiness check",
    description="Check if the database is reachable. Used for readiness probes.",
)
async def readiness_check(response: Response) -> ReadinessResponse:
    """Check readiness of the database.

    Args:
        response: FastAPI response object for setting status code.

    Returns:
        ReadinessResponse: Status of all dependency checks.
    """
    start_time = time.perf_counter()
    db_result = await check_database_connection()
    latency_ms = (time.perf_counter() - start_time) * 1000

    checks = [
        CheckResult(
            name="database",
            healthy=db_result["healthy"],
            latency_ms=round(latency_ms, 2),
            error=db_result.get("error"),
        )
    ]

    all_healthy = all(check.healthy for check in checks)
    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status=HealthStatus.HEALTHY if all_healthy else HealthStatus.UNHEALTHY,
        checks=checks,
    )


@router.get("/", summary="Service index")
async def root() -> dict:
    settings = get_settings()
    return {
        "message": f"{settings.restaurant_name} API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {"health": "/health", "api": "/api", **API_ENDPOINTS},
    }


@router.get("/api", summary="API index")
async def api_root() -> dict:
    settings = get_settings()
    return {
        "message": f"{settings.restaurant_name} API",
        "version": "1.0.0",
        "endpoints": API_ENDPOINTS,
    }
