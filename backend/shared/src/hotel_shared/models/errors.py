"""Standard error codes for the hotel directory.

Every failure raised by the service layer is a HotelError subclass carrying
a machine-readable code and the HTTP status the API layer should answer with.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Machine-readable error codes shared with API consumers."""

    # Validation errors
    HOTEL_REQUIRED_FIELDS = "HOTEL_REQUIRED_FIELDS"
    INVALID_STATUS_FILTER = "INVALID_STATUS_FILTER"

    # Authorization errors
    NO_PERMISSION = "NO_PERMISSION"

    # Lookup errors
    HOTEL_NOT_FOUND = "HOTEL_NOT_FOUND"

    # Workflow errors
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.HOTEL_REQUIRED_FIELDS: "Hotel name and city are required",
    ErrorCode.INVALID_STATUS_FILTER: "Unknown hotel status filter",
    ErrorCode.NO_PERMISSION: "You do not have permission to access this hotel",
    ErrorCode.HOTEL_NOT_FOUND: "Hotel not found",
    ErrorCode.INVALID_STATUS_TRANSITION: "Hotel has already been reviewed with a different decision",
}

# HTTP status hints for the API layer
ERROR_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.HOTEL_REQUIRED_FIELDS: 400,
    ErrorCode.INVALID_STATUS_FILTER: 400,
    ErrorCode.NO_PERMISSION: 403,
    ErrorCode.HOTEL_NOT_FOUND: 404,
    ErrorCode.INVALID_STATUS_TRANSITION: 409,
}


class ErrorResponse(BaseModel):
    """Standard error body returned to API consumers."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message for the code.
        """
        return cls(error_code=code, message=ERROR_MESSAGES[code], details=details)


class HotelError(Exception):
    """Base exception raised by hotel directory operations.

    Can be caught and converted to an ErrorResponse at the API boundary.
    """

    default_code: ErrorCode = ErrorCode.HOTEL_NOT_FOUND

    def __init__(
        self,
        code: Optional[ErrorCode] = None,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code or self.default_code
        self.message = ERROR_MESSAGES[self.code]
        self.status_code = ERROR_HTTP_STATUS[self.code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse.from_code(self.code, self.details)


class HotelValidationError(HotelError):
    """Required input is missing or unusable."""

    default_code = ErrorCode.HOTEL_REQUIRED_FIELDS


class HotelNotFoundError(HotelError):
    """The referenced hotel does not exist."""

    default_code = ErrorCode.HOTEL_NOT_FOUND


class HotelPermissionError(HotelError):
    """The caller does not own the referenced hotel."""

    default_code = ErrorCode.NO_PERMISSION


class InvalidStatusTransitionError(HotelError):
    """The hotel cannot move to the requested workflow status."""

    default_code = ErrorCode.INVALID_STATUS_TRANSITION
