"""Pagination models shared by every hotel listing."""

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

DEFAULT_PAGE = 1


def _coerce_positive_int(value: Any, default: int) -> int:
    """Coerce a query value to a positive integer.

    Absent, non-numeric and non-positive values fall back to the default.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number >= 1 else default


class PageRequest(BaseModel):
    """Resolved page/limit pair for one listing call."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=1)
    limit: int = Field(ge=1)

    @classmethod
    def resolve(cls, page: Any = None, limit: Any = None, *, default_limit: int) -> "PageRequest":
        """Build a PageRequest from raw caller input.

        Args:
            page: Requested page number (any type)
            limit: Requested page size (any type)
            default_limit: Page size of the calling operation

        Returns:
            PageRequest with defaults applied
        """
        return cls(
            page=_coerce_positive_int(page, DEFAULT_PAGE),
            limit=_coerce_positive_int(limit, default_limit),
        )

    @property
    def skip(self) -> int:
        """Number of records preceding this page."""
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    """Pagination metadata returned next to a page of items."""

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, request: PageRequest, total: int) -> "Pagination":
        """Compute metadata for a page request and a matching-record count."""
        total_pages = math.ceil(total / request.limit) if total > 0 else 0
        return cls(
            page=request.page,
            limit=request.limit,
            total=total,
            total_pages=total_pages,
        )


class Page(BaseModel, Generic[T]):
    """One page of results plus its pagination metadata."""

    items: list[T] = Field(default_factory=list)
    pagination: Pagination
