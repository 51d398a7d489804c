"""API models for hotel endpoints.

Request bodies are accepted as raw JSON objects: the service layer applies
lenient coercion to optional fields and strict checks to required ones, so
the examples below document the accepted shape rather than enforce it.
"""

from typing import Any

from hotel_shared.models import HotelListing, HotelView, Page

HotelPageResponse = Page[HotelListing]
HotelDetailResponse = HotelView

HOTEL_CREATE_EXAMPLES: dict[str, Any] = {
    "full": {
        "summary": "Hotel with images and labels",
        "value": {
            "name": "Sea View",
            "city": "Busan",
            "address": "Haeundae-gu 12",
            "images": ["https://cdn.example.com/sea-view/front.jpg"],
            "rating": 4.5,
            "freebies": ["breakfast", "parking"],
            "amenities": ["pool", "wifi"],
        },
    },
    "minimal": {
        "summary": "Only required fields",
        "value": {"name": "Sea View", "city": "Busan"},
    },
}

HOTEL_UPDATE_EXAMPLES: dict[str, Any] = {
    "rename": {
        "summary": "Change the city only",
        "value": {"city": "Seoul"},
    },
    "add_images": {
        "summary": "Append images to the gallery",
        "value": {"images": ["https://cdn.example.com/sea-view/lobby.jpg"]},
    },
}
