"""Health check endpoint."""

from datetime import UTC, datetime

from fastapi import APIRouter

from hotel_api.models.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Liveness probe",
    response_model=HealthResponse,
)
async def health() -> HealthResponse:
    return HealthResponse(timestamp=datetime.now(UTC).isoformat())
