"""Health check endpoint for monitoring service status."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from clickhub.managers.connection_registry import connection_registry
from clickhub.managers.counter_state import counter_state

router = APIRouter()


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    active_connections: int
    total_clicks: int


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint",
    tags=["health"],
)
async def health_check() -> HealthResponse:
    """
    Report liveness together with the hub's in-memory state.

    The hub has no external dependencies, so a response at all means the
    event loop is serving requests.

    Returns:
        HealthResponse: Live connection count and the global click total.
    """
    return HealthResponse(
        status="healthy",
        active_connections=len(connection_registry),
        total_clicks=counter_state.current_total(),
    )
