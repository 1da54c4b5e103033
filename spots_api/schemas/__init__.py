"""Schemas subpackage — Pydantic request/response models."""

from spots_api.schemas.spot import (
    ErrorResponse,
    HealthResponse,
    SpotCreate,
    SpotCreatedResponse,
    SpotListResponse,
    SpotOut,
    SpotRecord,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "SpotCreate",
    "SpotCreatedResponse",
    "SpotListResponse",
    "SpotOut",
    "SpotRecord",
]
