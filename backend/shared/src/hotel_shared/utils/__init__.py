"""Utility helpers shared across packages."""
