"""
Spot Repository
===============
Reads and writes the ``spots`` table through a resolved Supabase handle.

Each public method is a single remote call (PostgREST select / insert or the
``spots_near`` RPC).  Nothing is retried: failures are logged and re-raised
as :class:`~spots_api.errors.UpstreamError`, which the HTTP layer turns into
a 500.  Proximity ordering and the geography distance test both live in the
database function, not here.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from postgrest import APIError
from supabase_auth.errors import AuthApiError, AuthError

from spots_api.errors import UpstreamError
from spots_api.schemas.spot import SpotCreate
from spots_api.services.clients import ScopedClient
from spots_api.spatial.wkt import decode_point, encode_point

logger = logging.getLogger(__name__)

SPOTS_TABLE = "spots"
NEAR_PROCEDURE = "spots_near"
DEFAULT_RADIUS_KM = 10.0

# Columns echoed back to clients; ``location`` is only read to derive lat/lng.
RECORD_COLUMNS = (
    "id",
    "name",
    "description",
    "city",
    "country",
    "rating",
    "visibility",
    "created_by",
    "created_at",
)
LIST_SELECT = ",".join((*RECORD_COLUMNS, "location"))


def flatten_location(row: dict[str, Any]) -> dict[str, Any]:
    """Replace a row's ``location`` with decoded ``lat`` / ``lng``."""
    out = {k: v for k, v in row.items() if k != "location"}
    out.update(decode_point(row.get("location")).as_dict())
    return out


def project_record(row: dict[str, Any]) -> dict[str, Any]:
    return {column: row.get(column) for column in RECORD_COLUMNS}


class SpotRepository:
    """
    Spot operations bound to one request's Supabase handle.

    The handle's identity (anon key or caller JWT) determines which rows
    row-level security lets these calls see or write.
    """

    def __init__(self, scoped: ScopedClient) -> None:
        self.scoped = scoped
        self.client = scoped.client

    # ── Reads ─────────────────────────────────────────────────

    async def list_spots(self) -> list[dict[str, Any]]:
        try:
            response = await self.client.table(SPOTS_TABLE).select(LIST_SELECT).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise self._upstream("list spots", exc) from exc
        return [flatten_location(row) for row in response.data or []]

    async def spots_near(
        self,
        lat: float,
        lng: float,
        radius_km: float = DEFAULT_RADIUS_KM,
    ) -> list[dict[str, Any]]:
        """
        Spots within *radius_km* of ``(lat, lng)``.

        Delegates to the ``spots_near(lat, lng, radius_km)`` database
        function, which owns the geography distance test and ordering.
        """
        params = {"lat": lat, "lng": lng, "radius_km": radius_km}
        try:
            response = await self.client.rpc(NEAR_PROCEDURE, params).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise self._upstream(NEAR_PROCEDURE, exc) from exc
        return [flatten_location(row) for row in response.data or []]

    # ── Identity ──────────────────────────────────────────────

    async def current_user_id(self) -> str | None:
        """
        Ask Supabase Auth who the presented credential belongs to.

        Returns ``None`` when there is no credential or it is rejected.  An
        unreachable or failing (5xx) auth service is an upstream error.
        """
        if not self.scoped.is_authenticated:
            return None
        try:
            response = await self.client.auth.get_user(self.scoped.token)
        except AuthApiError as exc:
            if (exc.status or 0) >= 500:
                raise self._upstream("resolve user", exc) from exc
            logger.info("Credential rejected by Supabase Auth: %s", exc.message)
            return None
        except (AuthError, httpx.HTTPError) as exc:
            raise self._upstream("resolve user", exc) from exc

        user = response.user if response is not None else None
        if user is None:
            return None
        return str(user.id)

    # ── Writes ────────────────────────────────────────────────

    async def create_spot(self, data: SpotCreate, user_id: str) -> dict[str, Any] | None:
        """
        Insert a spot owned by *user_id*.

        Returns the stored row without its raw geometry, or ``None`` if the
        store returned no representation.
        """
        payload = {
            "name": data.name,
            "description": data.description,
            "city": data.city,
            "country": data.country,
            "rating": data.rating,
            "visibility": data.visibility,
            "created_by": user_id,
            "location": encode_point(data.lat, data.lng),
        }
        try:
            response = await self.client.table(SPOTS_TABLE).insert(payload).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise self._upstream("insert spot", exc) from exc

        rows = response.data or []
        if not rows:
            return None
        return project_record(rows[0])

    # ── Helpers ───────────────────────────────────────────────

    @staticmethod
    def _upstream(operation: str, exc: Exception) -> UpstreamError:
        message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
        logger.exception("Supabase %s failed: %s", operation, message)
        return UpstreamError(message)
