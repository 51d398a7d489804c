"""API routes package.

Routers are organized by concern:

- health: Liveness probe
- hotels: Owner management, admin review and public listing of hotels

All routers are registered in main.py with /api prefix.
"""

from hotel_api.routes.health import router as health_router
from hotel_api.routes.hotels import router as hotels_router

__all__ = [
    "health_router",
    "hotels_router",
]
