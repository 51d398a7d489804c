"""Hotel models for owner management, approval and public listing."""

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)

from .enums import HotelStatus
from .errors import ErrorCode, HotelValidationError


def coerce_rating(value: Any) -> float | None:
    """Coerce a raw rating to a non-negative float.

    Returns None when the value is not a finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return max(number, 0.0)


def coerce_labels(value: Any) -> list[str] | None:
    """Coerce a raw label list; returns None when the value is not a list."""
    if not isinstance(value, (list, tuple)):
        return None
    return [str(item) for item in value if item is not None]


def _required_text(payload: Mapping[str, Any], field: str) -> str:
    raw = payload.get(field)
    text = str(raw).strip() if raw is not None else ""
    if not text:
        raise HotelValidationError(
            code=ErrorCode.HOTEL_REQUIRED_FIELDS,
            details={"field": field},
        )
    return text


class OwnerContact(BaseModel):
    """Contact projection of the owning user (pending review queue)."""

    model_config = ConfigDict(extra="forbid")

    user_id: str
    name: str | None = None
    email: str | None = None


class OwnerSummary(BaseModel):
    """Full projection of the owning user attached to admin views."""

    user_id: str
    name: str | None = None
    email: str | None = None
    business_number: str | None = None


class Hotel(BaseModel):
    """A hotel record as stored in the directory."""

    hotel_id: str
    name: str = Field(min_length=1)
    city: str = Field(min_length=1)
    address: str | None = None
    images: list[str] = Field(default_factory=list)
    rating: float = Field(default=0.0, ge=0)
    freebies: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    status: HotelStatus = HotelStatus.PENDING
    owner_id: str
    created_at: datetime
    updated_at: datetime


class HotelView(Hotel):
    """Hotel with an optional owner projection."""

    owner: OwnerContact | OwnerSummary | None = Field(
        default=None, union_mode="left_to_right"
    )


class HotelListing(HotelView):
    """Hotel enriched with the minimum price of its rooms.

    The canonical field is min_price. API consumers receive it under both
    minPrice and basePrice.
    """

    min_price: float = Field(
        default=0.0,
        validation_alias=AliasChoices("min_price", "minPrice"),
        serialization_alias="minPrice",
    )

    @computed_field(alias="basePrice")  # type: ignore[prop-decorator]
    @property
    def base_price(self) -> float:
        return self.min_price


class HotelCreate(BaseModel):
    """Validated data for a new hotel.

    Status is not accepted here; new hotels always start pending.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    city: str = Field(min_length=1)
    address: str | None = None
    images: list[str] = Field(default_factory=list)
    rating: float = Field(default=0.0, ge=0)
    freebies: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)

    @field_validator("rating", mode="before")
    @classmethod
    def lenient_rating(cls, v: Any) -> float:
        """Invalid or negative ratings become 0."""
        rating = coerce_rating(v)
        return rating if rating is not None else 0.0

    @field_validator("images", "freebies", "amenities", mode="before")
    @classmethod
    def lenient_labels(cls, v: Any) -> list[str]:
        """Malformed lists become empty lists."""
        labels = coerce_labels(v)
        return labels if labels is not None else []

    @field_validator("address", mode="before")
    @classmethod
    def address_as_text(cls, v: Any) -> str | None:
        return None if v is None else str(v)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "HotelCreate":
        """Build creation data from a raw request payload.

        Raises:
            HotelValidationError: If name or city is missing or blank
        """
        name = _required_text(payload, "name")
        city = _required_text(payload, "city")
        return cls.model_validate({**payload, "name": name, "city": city})


class HotelPatch(BaseModel):
    """Explicit partial update for a hotel.

    Only fields that were set are applied. append_images is added to the
    end of the stored image list instead of replacing it.
    """

    name: str | None = None
    city: str | None = None
    address: str | None = None
    rating: float | None = None
    freebies: list[str] | None = None
    amenities: list[str] | None = None
    append_images: list[str] | None = None

    @field_validator("rating", mode="before")
    @classmethod
    def lenient_rating(cls, v: Any) -> float | None:
        """Negative ratings become 0; non-numbers become None."""
        return coerce_rating(v)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "HotelPatch":
        """Build a patch from a raw request payload.

        Malformed optional values are dropped from the patch rather than
        rejected. A name or city that is present must not be blank.

        Raises:
            HotelValidationError: If name or city is present but blank
        """
        values: dict[str, Any] = {}

        for field in ("name", "city"):
            if field in payload:
                values[field] = _required_text(payload, field)

        if "address" in payload:
            address = payload["address"]
            values["address"] = None if address is None else str(address)

        if "rating" in payload:
            rating = coerce_rating(payload["rating"])
            if rating is not None:
                values["rating"] = rating

        for field in ("freebies", "amenities"):
            if field in payload:
                labels = coerce_labels(payload[field])
                if labels is not None:
                    values[field] = labels

        images = coerce_labels(payload.get("images"))
        if images:
            values["append_images"] = images

        return cls(**values)

    def normalized(self) -> "HotelPatch":
        """Re-apply the payload rules to a patch built field by field."""
        payload = self.changes()
        if "append_images" in payload:
            payload["images"] = payload.pop("append_images")
        return HotelPatch.from_payload(payload)

    def changes(self) -> dict[str, Any]:
        """Fields to apply, keyed by name."""
        return self.model_dump(exclude_unset=True)

    def is_empty(self) -> bool:
        return not self.model_fields_set
