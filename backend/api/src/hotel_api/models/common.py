"""Shared API request/response models.

Domain models (Hotel, Page, etc.) live in hotel_shared.models. This module
provides HTTP/API layer specific concerns only.
"""

from pydantic import BaseModel, ConfigDict, Field

# Re-export ErrorResponse for convenience - this is the standard error format
from hotel_shared.models.errors import ErrorCode, ErrorResponse

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "HealthResponse",
]


class HealthResponse(BaseModel):
    """Liveness probe response."""

    model_config = ConfigDict(strict=True)

    status: str = Field(default="ok", examples=["ok"])
    service: str = Field(default="hotel-api", examples=["hotel-api"])
    timestamp: str = Field(..., description="Server time (ISO 8601, UTC)")
