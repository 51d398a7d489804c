"""Backend services for the hotel directory."""

from .dynamodb import (
    DynamoDBService,
    UnprocessedKeysError,
    get_dynamodb_service,
    reset_dynamodb_service,
)
from .hotels import HotelService
from .room_prices import DynamoDBRoomPriceSource, RoomPriceSource, attach_min_prices

__all__ = [
    "DynamoDBService",
    "DynamoDBRoomPriceSource",
    "HotelService",
    "RoomPriceSource",
    "UnprocessedKeysError",
    "attach_min_prices",
    "get_dynamodb_service",
    "reset_dynamodb_service",
]
