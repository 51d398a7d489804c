"""FastAPI dependency injection providers for shared services.

This module provides factory functions for service instances using @lru_cache
so each service is created once per process and reused across requests.

Usage in routes:
    from hotel_api.dependencies import get_hotel_service

    @router.get("/hotel")
    async def list_hotels(
        service: HotelService = Depends(get_hotel_service),
    ):
        ...

Service Dependency Graph:
    DynamoDBService (singleton via get_dynamodb_service)
        ├── DynamoDBRoomPriceSource
        └── HotelService

Testing:
    Use reset_services() to clear cached instances between tests, or
    override get_hotel_service via app.dependency_overrides.
"""

from functools import lru_cache

from hotel_shared.services.dynamodb import get_dynamodb_service
from hotel_shared.services.hotels import HotelService
from hotel_shared.services.room_prices import DynamoDBRoomPriceSource


@lru_cache
def get_room_price_source() -> DynamoDBRoomPriceSource:
    """Get cached room price source backed by the rooms table."""
    return DynamoDBRoomPriceSource(db=get_dynamodb_service())


@lru_cache
def get_hotel_service() -> HotelService:
    """Get cached HotelService instance.

    Returns:
        HotelService configured with DynamoDB and the room price source.
    """
    return HotelService(
        db=get_dynamodb_service(),
        room_prices=get_room_price_source(),
    )


def reset_services() -> None:
    """Clear all cached service instances.

    Call this in test fixtures to ensure clean state between tests.
    Also resets the underlying DynamoDB singleton.
    """
    from hotel_shared.services.dynamodb import reset_dynamodb_service

    get_room_price_source.cache_clear()
    get_hotel_service.cache_clear()

    reset_dynamodb_service()
