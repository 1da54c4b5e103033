"""Routers subpackage — HTTP layer for all API endpoints."""

from spots_api.routers import health, spots

__all__ = ["health", "spots"]
