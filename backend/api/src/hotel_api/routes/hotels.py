"""Hotel endpoints for owners, admins and public browsing.

Provides REST endpoints for:
- Listing approved hotels (public)
- Listing, creating, reading and updating own hotels (owner)
- Listing all/pending hotels, reading any hotel, approving and rejecting (admin)

Owner and admin endpoints rely on identity headers injected by API Gateway
(see hotel_api.security).
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Query
from starlette.status import HTTP_201_CREATED

from hotel_api.dependencies import get_hotel_service
from hotel_api.models.common import ErrorResponse
from hotel_api.models.hotels import (
    HOTEL_CREATE_EXAMPLES,
    HOTEL_UPDATE_EXAMPLES,
    HotelDetailResponse,
    HotelPageResponse,
)
from hotel_api.security import Principal, require_admin, require_owner
from hotel_shared.models import Hotel
from hotel_shared.services.hotels import ALL_STATUSES, HotelService

router = APIRouter(prefix="/hotel", tags=["hotels"])

PAGE_QUERY = Query(default=None, description="Page number, starting at 1")
LIMIT_QUERY = Query(default=None, description="Page size")
HOTEL_ID_PATH = Path(..., description="Hotel identifier")

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing required fields"},
    401: {"description": "Identity headers missing"},
    403: {"model": ErrorResponse, "description": "Caller may not access this hotel"},
    404: {"model": ErrorResponse, "description": "Hotel not found"},
}


# === Public ===


@router.get(
    "",
    summary="List approved hotels",
    description="""
List hotels that passed review, newest first.

**Public endpoint** - no authentication required.

Each hotel carries `minPrice`/`basePrice`, the cheapest room price
(0 when the hotel has no rooms). Default page size is 20.
""",
    response_model=HotelPageResponse,
)
def list_approved_hotels(
    page: str | None = PAGE_QUERY,
    limit: str | None = LIMIT_QUERY,
    service: HotelService = Depends(get_hotel_service),
) -> HotelPageResponse:
    return service.list_approved(page=page, limit=limit)


# === Owner ===


@router.get(
    "/owner",
    summary="List my hotels",
    description="List hotels owned by the caller, newest first. Default page size is 10.",
    response_model=HotelPageResponse,
    responses=ERROR_RESPONSES,
)
def list_my_hotels(
    page: str | None = PAGE_QUERY,
    limit: str | None = LIMIT_QUERY,
    principal: Principal = Depends(require_owner),
    service: HotelService = Depends(get_hotel_service),
) -> HotelPageResponse:
    return service.list_by_owner(principal.user_id, page=page, limit=limit)


@router.post(
    "/owner",
    summary="Register a hotel",
    description="""
Register a new hotel owned by the caller.

`name` and `city` are required. The hotel always starts in `pending` status
and becomes publicly visible once an admin approves it.
""",
    response_model=Hotel,
    status_code=HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_hotel(
    payload: dict[str, Any] = Body(..., openapi_examples=HOTEL_CREATE_EXAMPLES),
    principal: Principal = Depends(require_owner),
    service: HotelService = Depends(get_hotel_service),
) -> Hotel:
    return service.create(principal.user_id, payload)


@router.get(
    "/owner/{hotel_id}",
    summary="Get one of my hotels",
    response_model=HotelDetailResponse,
    responses=ERROR_RESPONSES,
)
def get_my_hotel(
    hotel_id: str = HOTEL_ID_PATH,
    principal: Principal = Depends(require_owner),
    service: HotelService = Depends(get_hotel_service),
) -> HotelDetailResponse:
    return service.get_by_id(hotel_id, owner_id=principal.user_id)


@router.patch(
    "/owner/{hotel_id}",
    summary="Update one of my hotels",
    description="""
Partially update a hotel owned by the caller.

Only fields present in the body are changed. `images` are appended to the
existing gallery rather than replacing it.
""",
    response_model=Hotel,
    responses=ERROR_RESPONSES,
)
def update_my_hotel(
    hotel_id: str = HOTEL_ID_PATH,
    payload: dict[str, Any] = Body(..., openapi_examples=HOTEL_UPDATE_EXAMPLES),
    principal: Principal = Depends(require_owner),
    service: HotelService = Depends(get_hotel_service),
) -> Hotel:
    return service.update(principal.user_id, hotel_id, payload)


# === Admin ===


@router.get(
    "/admin",
    summary="List all hotels",
    description="List every hotel with owner contact details. Filter with `status` (default `all`).",
    response_model=HotelPageResponse,
    responses=ERROR_RESPONSES,
)
def list_all_hotels(
    status: str = Query(
        default=ALL_STATUSES,
        description="pending, approved, rejected or all",
    ),
    page: str | None = PAGE_QUERY,
    limit: str | None = LIMIT_QUERY,
    principal: Principal = Depends(require_admin),
    service: HotelService = Depends(get_hotel_service),
) -> HotelPageResponse:
    return service.list_all(status=status, page=page, limit=limit)


@router.get(
    "/admin/pending",
    summary="List hotels awaiting review",
    response_model=HotelPageResponse,
    responses=ERROR_RESPONSES,
)
def list_pending_hotels(
    page: str | None = PAGE_QUERY,
    limit: str | None = LIMIT_QUERY,
    principal: Principal = Depends(require_admin),
    service: HotelService = Depends(get_hotel_service),
) -> HotelPageResponse:
    return service.list_pending(page=page, limit=limit)


@router.get(
    "/admin/{hotel_id}",
    summary="Get any hotel",
    response_model=HotelDetailResponse,
    responses=ERROR_RESPONSES,
)
def get_hotel(
    hotel_id: str = HOTEL_ID_PATH,
    principal: Principal = Depends(require_admin),
    service: HotelService = Depends(get_hotel_service),
) -> HotelDetailResponse:
    return service.get_by_id(hotel_id)


@router.patch(
    "/admin/{hotel_id}/approve",
    summary="Approve a hotel",
    response_model=Hotel,
    responses={
        **ERROR_RESPONSES,
        409: {"model": ErrorResponse, "description": "Hotel was already rejected"},
    },
)
def approve_hotel(
    hotel_id: str = HOTEL_ID_PATH,
    principal: Principal = Depends(require_admin),
    service: HotelService = Depends(get_hotel_service),
) -> Hotel:
    return service.approve(hotel_id)


@router.patch(
    "/admin/{hotel_id}/reject",
    summary="Reject a hotel",
    response_model=Hotel,
    responses={
        **ERROR_RESPONSES,
        409: {"model": ErrorResponse, "description": "Hotel was already approved"},
    },
)
def reject_hotel(
    hotel_id: str = HOTEL_ID_PATH,
    principal: Principal = Depends(require_admin),
    service: HotelService = Depends(get_hotel_service),
) -> Hotel:
    return service.reject(hotel_id)
