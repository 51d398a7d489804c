"""Enumeration types for hotel directory data models."""

from enum import Enum


class HotelStatus(str, Enum):
    """Approval workflow status of a hotel."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserRole(str, Enum):
    """Role of the calling principal, as asserted by the API gateway."""

    USER = "user"
    OWNER = "owner"
    ADMIN = "admin"
