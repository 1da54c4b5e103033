"""Liveness endpoint.  Does not touch Supabase."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from spots_api.config import get_settings
from spots_api.schemas.spot import HealthResponse

router = APIRouter(tags=["Health"])


def utc_timestamp() -> str:
    """Current UTC instant as ``2025-01-01T00:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(env=get_settings().app_env, ts=utc_timestamp())
