"""
Spot Endpoints
==============
List, proximity search and creation of spots.  Every handler runs under the
Supabase handle resolved from the request's bearer credential.
"""

from __future__ import annotations

import math
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from pydantic import ValidationError

from spots_api.errors import InvalidInput, NotAuthorized, describe_validation_errors
from spots_api.schemas.spot import SpotCreate, SpotCreatedResponse, SpotListResponse
from spots_api.services.clients import ScopedClient, get_scoped_client
from spots_api.services.spots import DEFAULT_RADIUS_KM, SpotRepository

router = APIRouter(prefix="/spots", tags=["Spots"])


def _parse_number(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


# ── List ──────────────────────────────────────────────────────────
@router.get("", response_model=SpotListResponse)
async def list_spots(scoped: ScopedClient = Depends(get_scoped_client)):
    """All spots visible to the caller, with ``lat`` / ``lng`` decoded."""
    spots = await SpotRepository(scoped).list_spots()
    return SpotListResponse(count=len(spots), spots=spots)


# ── Proximity search ──────────────────────────────────────────────
@router.get("/near", response_model=SpotListResponse)
async def spots_near(
    lat: str | None = Query(default=None),
    lng: str | None = Query(default=None),
    radius_km: str | None = Query(default=None, alias="radiusKm"),
    scoped: ScopedClient = Depends(get_scoped_client),
):
    """
    Spots within ``radiusKm`` (default 10 km) of ``lat`` / ``lng``.

    Coordinates are taken as raw strings so that a missing or non-numeric
    value yields a 400 before the ``spots_near`` RPC is called.
    """
    lat_value = _parse_number(lat)
    lng_value = _parse_number(lng)
    if lat_value is None or lng_value is None:
        raise InvalidInput("lat/lng are required")

    if radius_km is None:
        radius = DEFAULT_RADIUS_KM
    else:
        radius = _parse_number(radius_km)
        if radius is None or radius <= 0:
            raise InvalidInput("radiusKm must be a positive number")

    spots = await SpotRepository(scoped).spots_near(lat_value, lng_value, radius)
    return SpotListResponse(count=len(spots), spots=spots)


# ── Create ────────────────────────────────────────────────────────
@router.post("", response_model=SpotCreatedResponse, status_code=201)
async def create_spot(
    payload: Any = Body(default=None),
    scoped: ScopedClient = Depends(get_scoped_client),
):
    """
    Create a spot owned by the authenticated caller.

    Identity is confirmed first (401), then the body is validated (400);
    nothing is written unless both pass.
    """
    repo = SpotRepository(scoped)
    user_id = await repo.current_user_id()
    if user_id is None:
        raise NotAuthorized()

    if payload is not None and not isinstance(payload, dict):
        raise InvalidInput("Request body must be a JSON object")
    try:
        data = SpotCreate.model_validate(payload or {})
    except ValidationError as exc:
        raise InvalidInput(describe_validation_errors(exc.errors())) from exc

    spot = await repo.create_spot(data, user_id)
    return SpotCreatedResponse(spot=spot)
