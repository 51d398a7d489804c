"""HTTP middleware for the hotel directory API."""

from hotel_api.middleware.correlation import CorrelationIdMiddleware

__all__ = ["CorrelationIdMiddleware"]
