"""Shared models and services for the hotel directory backend."""

__version__ = "0.1.0"
