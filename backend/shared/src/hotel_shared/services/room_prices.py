"""Minimum room price lookup and hotel listing enrichment."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

from hotel_shared.models import HotelListing, HotelView

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService


class RoomPriceSource(Protocol):
    """Anything that can report the cheapest room price per hotel."""

    def min_prices(self, hotel_ids: Sequence[str]) -> dict[str, float]:
        """Return the minimum room price keyed by hotel id.

        Hotels without rooms may be left out of the result.
        """
        ...


class DynamoDBRoomPriceSource:
    """Room price source backed by the rooms table."""

    TABLE = "rooms"
    HOTEL_INDEX = "hotel_id-index"

    def __init__(self, db: "DynamoDBService") -> None:
        """Initialize room price source.

        Args:
            db: DynamoDB service instance
        """
        self.db = db

    def min_prices(self, hotel_ids: Sequence[str]) -> dict[str, float]:
        """Query each hotel's rooms and keep the lowest price."""
        prices: dict[str, float] = {}
        for hotel_id in dict.fromkeys(hotel_ids):
            rooms = self.db.query_by_gsi(
                table=self.TABLE,
                index_name=self.HOTEL_INDEX,
                partition_key_name="hotel_id",
                partition_key_value=hotel_id,
            )
            room_prices = [_price(room) for room in rooms]
            valid = [p for p in room_prices if p is not None]
            if valid:
                prices[hotel_id] = min(valid)
        return prices


def _price(room: dict[str, Any]) -> float | None:
    raw = room.get("price")
    if raw is None:
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def attach_min_prices(
    hotels: Sequence[HotelView],
    room_prices: RoomPriceSource,
) -> list[HotelListing]:
    """Attach the minimum room price to each hotel.

    Hotels without rooms get a minimum price of 0. The input models are not
    modified; each listing is a detached copy.

    Args:
        hotels: Hotels in display order
        room_prices: Source of minimum prices

    Returns:
        Listings in the same order as the input
    """
    if not hotels:
        return []

    prices = room_prices.min_prices([hotel.hotel_id for hotel in hotels])
    return [
        HotelListing.model_validate(
            {**hotel.model_dump(), "min_price": prices.get(hotel.hotel_id, 0.0)}
        )
        for hotel in hotels
    ]
