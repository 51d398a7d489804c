"""API request/response models."""

from hotel_api.models.common import ErrorResponse, HealthResponse
from hotel_api.models.hotels import (
    HOTEL_CREATE_EXAMPLES,
    HOTEL_UPDATE_EXAMPLES,
    HotelDetailResponse,
    HotelPageResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "HOTEL_CREATE_EXAMPLES",
    "HOTEL_UPDATE_EXAMPLES",
    "HotelDetailResponse",
    "HotelPageResponse",
]
