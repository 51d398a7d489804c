"""Pydantic models for hotel directory data entities."""

from .enums import HotelStatus, UserRole
from .errors import (
    ERROR_HTTP_STATUS,
    ERROR_MESSAGES,
    ErrorCode,
    ErrorResponse,
    HotelError,
    HotelNotFoundError,
    HotelPermissionError,
    HotelValidationError,
    InvalidStatusTransitionError,
)
from .hotel import (
    Hotel,
    HotelCreate,
    HotelListing,
    HotelPatch,
    HotelView,
    OwnerContact,
    OwnerSummary,
)
from .identifiers import EntityId
from .pagination import Page, PageRequest, Pagination

__all__ = [
    # Enums
    "HotelStatus",
    "UserRole",
    # Identifiers
    "EntityId",
    # Hotel
    "Hotel",
    "HotelCreate",
    "HotelListing",
    "HotelPatch",
    "HotelView",
    "OwnerContact",
    "OwnerSummary",
    # Pagination
    "Page",
    "PageRequest",
    "Pagination",
    # Errors
    "ERROR_HTTP_STATUS",
    "ERROR_MESSAGES",
    "ErrorCode",
    "ErrorResponse",
    "HotelError",
    "HotelNotFoundError",
    "HotelPermissionError",
    "HotelValidationError",
    "InvalidStatusTransitionError",
]
