"""Hotel directory service for owners, admins and public listings."""

import datetime as dt
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from functools import partial
from typing import TYPE_CHECKING, Any

from hotel_shared.models import (
    EntityId,
    ErrorCode,
    Hotel,
    HotelCreate,
    HotelListing,
    HotelNotFoundError,
    HotelPatch,
    HotelPermissionError,
    HotelStatus,
    HotelValidationError,
    HotelView,
    InvalidStatusTransitionError,
    OwnerContact,
    OwnerSummary,
    Page,
    PageRequest,
    Pagination,
)
from hotel_shared.models.hotel import coerce_rating
from hotel_shared.utils.logging import get_logger, log_hotel_operation

from .room_prices import DynamoDBRoomPriceSource, RoomPriceSource, attach_min_prices

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

ALL_STATUSES = "all"


def _now() -> str:
    return dt.datetime.now(dt.UTC).isoformat(timespec="microseconds")


class HotelService:
    """Service for hotel records and the approval workflow."""

    TABLE = "hotels"
    USERS_TABLE = "users"
    OWNER_INDEX = "owner_id-index"
    STATUS_INDEX = "status-index"

    OWNER_PAGE_SIZE = 10
    ADMIN_PAGE_SIZE = 10
    PUBLIC_PAGE_SIZE = 20

    def __init__(
        self,
        db: "DynamoDBService",
        room_prices: RoomPriceSource | None = None,
    ) -> None:
        """Initialize hotel service.

        Args:
            db: DynamoDB service instance
            room_prices: Minimum room price source. Defaults to the rooms table.
        """
        self.db = db
        self.room_prices = room_prices or DynamoDBRoomPriceSource(db)

    # =========================================================================
    # Owner operations
    # =========================================================================

    def list_by_owner(
        self,
        owner_id: EntityId | str,
        page: Any = None,
        limit: Any = None,
    ) -> Page[HotelListing]:
        """List hotels owned by a principal, newest first.

        Args:
            owner_id: Owning principal
            page: Requested page (defaults to 1)
            limit: Requested page size (defaults to 10)

        Returns:
            Page of hotels enriched with their minimum room price
        """
        owner = self._parse_owner(owner_id)
        request = PageRequest.resolve(page, limit, default_limit=self.OWNER_PAGE_SIZE)

        items, total = self._read_page(
            request,
            fetch=partial(
                self.db.query_by_gsi,
                table=self.TABLE,
                index_name=self.OWNER_INDEX,
                partition_key_name="owner_id",
                partition_key_value=str(owner),
                scan_index_forward=False,
                max_items=request.skip + request.limit,
            ),
            count=partial(
                self.db.count_by_gsi,
                table=self.TABLE,
                index_name=self.OWNER_INDEX,
                partition_key_name="owner_id",
                partition_key_value=str(owner),
            ),
        )

        hotels = [self._item_to_view(item) for item in items]
        return Page[HotelListing](
            items=attach_min_prices(hotels, self.room_prices),
            pagination=Pagination.build(request, total),
        )

    def create(
        self,
        owner_id: EntityId | str,
        fields: HotelCreate | Mapping[str, Any],
    ) -> Hotel:
        """Create a hotel in pending status.

        Args:
            owner_id: Owning principal
            fields: Creation data or raw payload

        Returns:
            The stored hotel

        Raises:
            HotelValidationError: If name or city is missing
        """
        owner = self._parse_owner(owner_id)
        payload = fields.model_dump() if isinstance(fields, HotelCreate) else fields
        data = HotelCreate.from_payload(payload)

        now = dt.datetime.now(dt.UTC)
        hotel = Hotel(
            hotel_id=str(EntityId.generate()),
            **data.model_dump(),
            status=HotelStatus.PENDING,
            owner_id=str(owner),
            created_at=now,
            updated_at=now,
        )

        self.db.put_item(
            self.TABLE,
            self._hotel_to_item(hotel),
            condition_expression="attribute_not_exists(hotel_id)",
        )

        log_hotel_operation(
            logger,
            "create_hotel",
            hotel_id=hotel.hotel_id,
            owner_id=hotel.owner_id,
            status=hotel.status.value,
        )
        return hotel

    def update(
        self,
        owner_id: EntityId | str,
        hotel_id: EntityId | str,
        patch: HotelPatch | Mapping[str, Any],
    ) -> Hotel:
        """Apply a partial update to an owned hotel.

        Ownership is checked on the stored record first. The write is then
        conditioned on the stored owner id being unchanged, and rewrites it
        in canonical form.

        Args:
            owner_id: Calling principal
            hotel_id: Hotel to update
            patch: Partial update or raw payload

        Returns:
            The updated hotel

        Raises:
            HotelNotFoundError: If the hotel does not exist
            HotelPermissionError: If the caller does not own the hotel
            HotelValidationError: If name or city is present but blank
        """
        owner = self._parse_owner(owner_id)
        key = self._key(hotel_id)
        changes = (
            patch.normalized() if isinstance(patch, HotelPatch) else HotelPatch.from_payload(patch)
        )

        item = self._get_owned_item(key, owner)
        if changes.is_empty():
            return self._item_to_hotel(item)

        update_expression, names, values = self._patch_expression(changes)
        update_expression += ", #owner_id = :owner_id"
        names["#owner_id"] = "owner_id"
        values[":owner_id"] = str(owner)

        while True:
            values[":stored_owner_id"] = item["owner_id"]
            attrs = self.db.update_item(
                table=self.TABLE,
                key=key,
                update_expression=update_expression,
                expression_attribute_values=values,
                expression_attribute_names=names,
                condition_expression="attribute_exists(hotel_id) AND #owner_id = :stored_owner_id",
            )
            if attrs is not None:
                log_hotel_operation(
                    logger,
                    "update_hotel",
                    hotel_id=key["hotel_id"],
                    owner_id=str(owner),
                    fields=",".join(sorted(changes.changes())),
                )
                return self._item_to_hotel(attrs)
            # Record changed since it was read: re-check ownership and retry
            item = self._get_owned_item(key, owner)

    # =========================================================================
    # Admin operations
    # =========================================================================

    def list_all(
        self,
        status: HotelStatus | str | None = ALL_STATUSES,
        page: Any = None,
        limit: Any = None,
    ) -> Page[HotelListing]:
        """List every hotel, optionally filtered by status.

        Args:
            status: A HotelStatus value or "all"
            page: Requested page (defaults to 1)
            limit: Requested page size (defaults to 10)

        Returns:
            Page of hotels with owner name/email/business number and min price

        Raises:
            HotelValidationError: If the status filter is unknown
        """
        request = PageRequest.resolve(page, limit, default_limit=self.ADMIN_PAGE_SIZE)
        status_filter = self._parse_status_filter(status)
        return self._list_by_status(status_filter, request, OwnerSummary)

    def list_pending(self, page: Any = None, limit: Any = None) -> Page[HotelListing]:
        """List hotels awaiting review, with owner name and email."""
        request = PageRequest.resolve(page, limit, default_limit=self.ADMIN_PAGE_SIZE)
        return self._list_by_status(HotelStatus.PENDING, request, OwnerContact)

    def approve(self, hotel_id: EntityId | str) -> Hotel:
        """Approve a hotel for public listing."""
        return self._review(hotel_id, HotelStatus.APPROVED)

    def reject(self, hotel_id: EntityId | str) -> Hotel:
        """Reject a hotel."""
        return self._review(hotel_id, HotelStatus.REJECTED)

    def get_by_id(
        self,
        hotel_id: EntityId | str,
        owner_id: EntityId | str | None = None,
    ) -> HotelView:
        """Get a single hotel with its owner projection.

        Args:
            hotel_id: Hotel to fetch
            owner_id: Calling owner for owner-scoped lookups; None for admins

        Returns:
            The hotel with owner name/email/business number

        Raises:
            HotelNotFoundError: If the hotel does not exist
            HotelPermissionError: If owner_id is given and does not own the hotel
        """
        key = self._key(hotel_id)
        if owner_id is None:
            item = self.db.get_item(self.TABLE, key)
            if not item:
                raise HotelNotFoundError(details={"hotel_id": key["hotel_id"]})
        else:
            item = self._get_owned_item(key, self._parse_owner(owner_id))

        owners = self._owner_projections([item["owner_id"]], OwnerSummary)
        return self._item_to_view(item, owners)

    # =========================================================================
    # Public operations
    # =========================================================================

    def list_approved(self, page: Any = None, limit: Any = None) -> Page[HotelListing]:
        """List approved hotels for public browsing (default page size 20)."""
        request = PageRequest.resolve(page, limit, default_limit=self.PUBLIC_PAGE_SIZE)
        return self._list_by_status(HotelStatus.APPROVED, request, owner_model=None)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _list_by_status(
        self,
        status: HotelStatus | None,
        request: PageRequest,
        owner_model: type[OwnerContact] | type[OwnerSummary] | None,
    ) -> Page[HotelListing]:
        fetch: Callable[[], list[dict[str, Any]]]
        count: Callable[[], int]
        if status is None:
            # Newest first across every status needs the whole table
            fetch = partial(self.db.scan, self.TABLE)
            count = partial(self.db.count, self.TABLE)
        else:
            fetch = partial(
                self.db.query_by_gsi,
                table=self.TABLE,
                index_name=self.STATUS_INDEX,
                partition_key_name="status",
                partition_key_value=status.value,
                scan_index_forward=False,
                max_items=request.skip + request.limit,
            )
            count = partial(
                self.db.count_by_gsi,
                table=self.TABLE,
                index_name=self.STATUS_INDEX,
                partition_key_name="status",
                partition_key_value=status.value,
            )

        items, total = self._read_page(request, fetch=fetch, count=count)

        owners: dict[str, OwnerContact | OwnerSummary] = {}
        if owner_model is not None:
            owners = self._owner_projections([i["owner_id"] for i in items], owner_model)

        hotels = [self._item_to_view(item, owners) for item in items]
        return Page[HotelListing](
            items=attach_min_prices(hotels, self.room_prices),
            pagination=Pagination.build(request, total),
        )

    @staticmethod
    def _read_page(
        request: PageRequest,
        fetch: Callable[[], list[dict[str, Any]]],
        count: Callable[[], int],
    ) -> tuple[list[dict[str, Any]], int]:
        """Run the item read and the count concurrently and cut one page."""
        with ThreadPoolExecutor(max_workers=2) as pool:
            items_future = pool.submit(fetch)
            total_future = pool.submit(count)
            items = items_future.result()
            total = total_future.result()

        items = sorted(items, key=lambda i: str(i.get("created_at", "")), reverse=True)
        return items[request.skip : request.skip + request.limit], total

    def _review(self, hotel_id: EntityId | str, target: HotelStatus) -> Hotel:
        """Move a hotel from pending to a review decision."""
        key = self._key(hotel_id)
        item = self.db.get_item(self.TABLE, key)
        if not item:
            raise HotelNotFoundError(details={"hotel_id": key["hotel_id"]})

        current = HotelStatus(item.get("status", HotelStatus.PENDING.value))
        if current not in (HotelStatus.PENDING, target):
            log_hotel_operation(
                logger,
                f"{target.value}_hotel",
                hotel_id=key["hotel_id"],
                status=current.value,
                error=ErrorCode.INVALID_STATUS_TRANSITION.value,
            )
            raise InvalidStatusTransitionError(
                details={"from": current.value, "to": target.value}
            )

        # Stored ratings must never be negative
        rating = coerce_rating(item.get("rating")) or 0.0

        attrs = self.db.update_item(
            table=self.TABLE,
            key=key,
            update_expression="SET #status = :status, #rating = :rating, updated_at = :updated_at",
            expression_attribute_values={
                ":status": target.value,
                ":pending": HotelStatus.PENDING.value,
                ":rating": Decimal(str(rating)),
                ":updated_at": _now(),
            },
            expression_attribute_names={"#status": "status", "#rating": "rating"},
            condition_expression="attribute_exists(hotel_id) AND #status IN (:pending, :status)",
        )
        if attrs is None:
            latest = self.db.get_item(self.TABLE, key)
            if not latest:
                raise HotelNotFoundError(details={"hotel_id": key["hotel_id"]})
            raise InvalidStatusTransitionError(
                details={"from": str(latest.get("status")), "to": target.value}
            )

        hotel = self._item_to_hotel(attrs)
        log_hotel_operation(
            logger,
            f"{target.value}_hotel",
            hotel_id=hotel.hotel_id,
            owner_id=hotel.owner_id,
            status=hotel.status.value,
        )
        return hotel

    def _get_owned_item(self, key: dict[str, str], owner: EntityId) -> dict[str, Any]:
        item = self.db.get_item(self.TABLE, key)
        if not item:
            raise HotelNotFoundError(details={"hotel_id": key["hotel_id"]})
        if EntityId.parse(item["owner_id"]) != owner:
            log_hotel_operation(
                logger,
                "ownership_check",
                hotel_id=key["hotel_id"],
                owner_id=str(owner),
                error=ErrorCode.NO_PERMISSION.value,
            )
            raise HotelPermissionError(details={"hotel_id": key["hotel_id"]})
        return item

    def _owner_projections(
        self,
        owner_ids: list[str],
        model: type[OwnerContact] | type[OwnerSummary],
    ) -> dict[str, OwnerContact | OwnerSummary]:
        """Look up owner projections keyed by canonical user id."""
        user_ids = dict.fromkeys(str(EntityId.parse(owner_id)) for owner_id in owner_ids)
        users = self.db.batch_get(self.USERS_TABLE, [{"user_id": u} for u in user_ids])

        projections: dict[str, OwnerContact | OwnerSummary] = {}
        for user in users:
            user_id = str(EntityId.parse(user["user_id"]))
            fields = {f: user.get(f) for f in model.model_fields if f != "user_id"}
            projections[user_id] = model(user_id=user_id, **fields)
        return projections

    @staticmethod
    def _parse_owner(owner_id: EntityId | str) -> EntityId:
        try:
            return EntityId.parse(owner_id)
        except ValueError:
            raise HotelPermissionError(details={"owner_id": "missing"}) from None

    @staticmethod
    def _key(hotel_id: EntityId | str) -> dict[str, str]:
        try:
            return {"hotel_id": str(EntityId.parse(hotel_id))}
        except ValueError:
            raise HotelNotFoundError(details={"hotel_id": ""}) from None

    @staticmethod
    def _parse_status_filter(status: HotelStatus | str | None) -> HotelStatus | None:
        if status is None or status == ALL_STATUSES or status == "":
            return None
        try:
            return HotelStatus(status)
        except ValueError:
            raise HotelValidationError(
                code=ErrorCode.INVALID_STATUS_FILTER,
                details={"status": str(status)},
            ) from None

    @staticmethod
    def _patch_expression(
        changes: HotelPatch,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        """Translate a patch into a DynamoDB SET expression."""
        assignments = ["updated_at = :updated_at"]
        names: dict[str, str] = {}
        values: dict[str, Any] = {":updated_at": _now()}

        for field, value in changes.changes().items():
            if field == "append_images":
                assignments.append(
                    "#images = list_append(if_not_exists(#images, :empty_list), :append_images)"
                )
                names["#images"] = "images"
                values[":empty_list"] = []
                values[":append_images"] = value
                continue

            # name/status etc. are reserved words
            names[f"#{field}"] = field
            assignments.append(f"#{field} = :{field}")
            values[f":{field}"] = Decimal(str(value)) if field == "rating" else value

        return "SET " + ", ".join(assignments), names, values

    @staticmethod
    def _hotel_to_item(hotel: Hotel) -> dict[str, Any]:
        """Convert Hotel model to DynamoDB item."""
        item: dict[str, Any] = {
            "hotel_id": hotel.hotel_id,
            "name": hotel.name,
            "city": hotel.city,
            "images": hotel.images,
            "rating": Decimal(str(hotel.rating)),
            "freebies": hotel.freebies,
            "amenities": hotel.amenities,
            "status": hotel.status.value,
            "owner_id": hotel.owner_id,
            "created_at": hotel.created_at.isoformat(timespec="microseconds"),
            "updated_at": hotel.updated_at.isoformat(timespec="microseconds"),
        }
        if hotel.address is not None:
            item["address"] = hotel.address
        return item

    @staticmethod
    def _hotel_fields(item: dict[str, Any]) -> dict[str, Any]:
        """Convert DynamoDB item to Hotel constructor arguments."""
        return {
            "hotel_id": item["hotel_id"],
            "name": item["name"],
            "city": item["city"],
            "address": item.get("address"),
            "images": list(item.get("images") or []),
            "rating": coerce_rating(item.get("rating")) or 0.0,
            "freebies": list(item.get("freebies") or []),
            "amenities": list(item.get("amenities") or []),
            "status": HotelStatus(item.get("status", HotelStatus.PENDING.value)),
            "owner_id": str(EntityId.parse(item["owner_id"])),
            "created_at": dt.datetime.fromisoformat(item["created_at"]),
            "updated_at": dt.datetime.fromisoformat(
                item.get("updated_at") or item["created_at"]
            ),
        }

    def _item_to_hotel(self, item: dict[str, Any]) -> Hotel:
        return Hotel(**self._hotel_fields(item))

    def _item_to_view(
        self,
        item: dict[str, Any],
        owners: dict[str, OwnerContact | OwnerSummary] | None = None,
    ) -> HotelView:
        fields = self._hotel_fields(item)
        owner = (owners or {}).get(fields["owner_id"])
        return HotelView(**fields, owner=owner)
