"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from odontoapp.config import settings
from odontoapp.core.redis_client import check_redis_connection
from odontoapp.dependencies import Runtime

router = APIRouter()


class HealthResponse(BaseModel):
    """Service liveness."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Liveness plus the state of each remote collaborator."""

    document_store: str
    document_store_backend: str
    redis: str


def _state(healthy: bool) -> str:
    return "healthy" if healthy else "unhealthy"


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
)
async def detailed_health_check(runtime: Runtime) -> DetailedHealthResponse:
    """
    Check the document store and the Redis session slot.

    The service reports ``degraded`` when either is unreachable; the app
    keeps working without Redis, only the offline account display is lost.
    """
    store_healthy = await runtime.store.ping()
    redis_healthy = await check_redis_connection()

    return DetailedHealthResponse(
        status="healthy" if store_healthy and redis_healthy else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        document_store=_state(store_healthy),
        document_store_backend=settings.document_store_backend,
        redis=_state(redis_healthy),
    )


@router.get("/ping", status_code=status.HTTP_200_OK, summary="Simple ping")
async def ping() -> dict[str, str]:
    return {"message": "pong"}
