"""FastAPI exception handlers for converting HotelError to HTTP responses.

Each HotelError carries the HTTP status it should be answered with:
- 400 Bad Request: missing required fields, unknown filters
- 403 Forbidden: caller does not own the hotel
- 404 Not Found: hotel does not exist
- 409 Conflict: hotel already reviewed with another decision

Usage:
    from hotel_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from hotel_shared.models.errors import HotelError
from hotel_shared.utils.logging import get_logger

logger = get_logger(__name__)


async def hotel_error_handler(request: Request, exc: HotelError) -> JSONResponse:
    """Convert a HotelError to a JSON error response.

    Args:
        request: The incoming request
        exc: The HotelError exception

    Returns:
        JSONResponse with the error body and the status carried by the error.
    """
    logger.info(
        "hotel_error",
        extra={
            "error_code": exc.code.value,
            "path": request.url.path,
            "status_code": exc.status_code,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_error_response().model_dump(mode="json"),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with a generic error response.

    Internal details are logged but never returned to the client.
    """
    logger.exception("Unhandled exception: %s", exc)

    error_response = {
        "success": False,
        "error_code": "ERR_INTERNAL",
        "message": "An unexpected error occurred",
        "details": None,
    }

    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(HotelError, hotel_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
