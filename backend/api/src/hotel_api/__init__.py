"""FastAPI application for the hotel directory REST API."""

__version__ = "0.1.0"
