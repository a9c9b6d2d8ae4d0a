"""
Health check endpoints
Provides health and readiness status for the application

- /health (liveness): App is running (doesn't check dependencies)
- /health/ready (readiness): App can reach its database

Reference:
- https://kubernetes.io/docs/tasks/configure-pod-container/configure-liveness-readiness-startup-probes/
- https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.database import Database, get_database
from app.core.exceptions import error_body

logger = logging.getLogger(__name__)

# Create router for health-related endpoints
# These paths are reserved: the frontend fallback never serves them
router = APIRouter(
    prefix="/health",
    tags=["health"],
)


class HealthResponse(BaseModel):
    """
    Response model for health check endpoint
    Reference: https://fastapi.tiangolo.com/tutorial/response-model/
    """
    success: bool
    message: str
    timestamp: str
    environment: str


def _timestamp() -> str:
    """ISO 8601 UTC timestamp with millisecond precision"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check (liveness)",
    description="Returns the liveness status of the application. Does not check dependencies.",
    status_code=status.HTTP_200_OK,
)
async def health_check(request: Request) -> HealthResponse:
    """
    Liveness probe endpoint

    **Returns:**
        HealthResponse: success flag, message, current time and environment name
    """
    return HealthResponse(
        success=True,
        message="Task manager API is running",
        timestamp=_timestamp(),
        environment=request.app.state.settings.ENVIRONMENT,
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check",
    description="Returns the readiness status including database connectivity check.",
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Service is not ready (database unavailable)"},
    },
)
async def readiness_check(
    request: Request,
    database: Database = Depends(get_database),
):
    """
    Readiness probe endpoint

    Checks if the application is ready to serve traffic by running a
    trivial query against the task store.

    **Returns:**
        HealthResponse when ready, otherwise a 503 error body
    """
    if not await database.ping():
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=error_body("database unavailable"),
        )
    return HealthResponse(
        success=True,
        message="Service is ready to serve traffic",
        timestamp=_timestamp(),
        environment=request.app.state.settings.ENVIRONMENT,
    )
