"""
Pydantic schemas for API request/response serialization.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_VISIBILITY = "public"


# ═══════════════════════════════════════════════════════════════════
# Spot schemas
# ═══════════════════════════════════════════════════════════════════
class SpotRecord(BaseModel):
    """A spot row as echoed by the store, without its geometry."""

    id: int | str
    name: str
    description: str | None = None
    city: str | None = None
    country: str | None = None
    rating: float | None = None
    visibility: str | None = DEFAULT_VISIBILITY
    created_by: str | None = None
    # Passed through in the store's own timestamp format.
    created_at: str | None = None


class SpotOut(SpotRecord):
    """Spot with its location flattened to coordinates."""

    # RPC rows may carry extra computed columns (e.g. distance); keep them.
    model_config = ConfigDict(extra="allow")

    lat: float | None = Field(default=None, description="Latitude (WGS84)")
    lng: float | None = Field(default=None, description="Longitude (WGS84)")


class SpotCreate(BaseModel):
    """Body of ``POST /spots``."""

    name: str = Field(min_length=1)
    description: str | None = None
    city: str | None = None
    country: str | None = None
    rating: float | None = None
    visibility: str | None = Field(default=None, validate_default=True)
    # Strict: JSON numbers only, no numeric strings or booleans.
    lat: float = Field(strict=True, allow_inf_nan=False)
    lng: float = Field(strict=True, allow_inf_nan=False)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("visibility")
    @classmethod
    def default_visibility(cls, v: str | None) -> str:
        return v or DEFAULT_VISIBILITY


# ═══════════════════════════════════════════════════════════════════
# Envelopes
# ═══════════════════════════════════════════════════════════════════
class SpotListResponse(BaseModel):
    ok: bool = True
    count: int
    spots: list[SpotOut]


class SpotCreatedResponse(BaseModel):
    ok: bool = True
    spot: SpotRecord | None


class HealthResponse(BaseModel):
    ok: bool = True
    env: str
    ts: str = Field(description="Current UTC instant, ISO-8601")


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
