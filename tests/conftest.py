"""
Shared fixtures for the Spots API test suite.

This conftest provides:
- A mocked Supabase ``AsyncClient`` (table / rpc / auth chains)
- Test client (httpx.AsyncClient) over the spot routers
- Reusable sample data factories
"""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# ---------------------------------------------------------------------------
# Sample data factories
# ---------------------------------------------------------------------------
SAMPLE_SPOT_ID = "0b6f3c8e-2a41-4f55-9d0e-5c1f0a7e9b21"
SAMPLE_USER_ID = "8d2e1f6a-7b3c-4d5e-8f90-1a2b3c4d5e6f"
SAMPLE_TOKEN = "header.payload.signature"


def make_spot_row(
    *,
    id: str = SAMPLE_SPOT_ID,
    name: str = "Cerro de la Gloria",
    location: object = "POINT(-68.83 -32.89)",
    visibility: str = "public",
    created_by: str | None = SAMPLE_USER_ID,
    **extra,
) -> dict:
    """Return a dict shaped like a PostgREST ``spots`` row."""
    row = {
        "id": id,
        "name": name,
        "description": "Mirador del parque",
        "city": "Mendoza",
        "country": "AR",
        "rating": 4.5,
        "visibility": visibility,
        "created_by": created_by,
        "created_at": "2025-01-01T00:00:00+00:00",
        "location": location,
    }
    row.update(extra)
    return row


def make_supabase_client(
    *,
    data: list[dict] | None = None,
    user_id: str | None = SAMPLE_USER_ID,
) -> MagicMock:
    """
    Return a mock that behaves like ``supabase.AsyncClient``.

    ``table().select()``, ``table().insert()`` and ``rpc()`` all resolve to
    the same query whose ``execute()`` returns ``data``.
    """
    client = MagicMock()

    response = MagicMock()
    response.data = data if data is not None else []
    query = MagicMock()
    query.execute = AsyncMock(return_value=response)

    client.table.return_value.select.return_value = query
    client.table.return_value.insert.return_value = query
    client.rpc.return_value = query

    user_response = MagicMock()
    user_response.user = MagicMock(id=user_id) if user_id is not None else None
    client.auth.get_user = AsyncMock(return_value=user_response)
    return client


# ---------------------------------------------------------------------------
# App / client fixtures
# ---------------------------------------------------------------------------
def create_test_app() -> FastAPI:
    """Bare app with the real routers and error handlers, no lifespan."""
    from spots_api.errors import register_error_handlers
    from spots_api.routers import health, spots

    app = FastAPI()
    register_error_handlers(app)
    app.include_router(health.router, prefix="/api/v1")
    app.include_router(spots.router, prefix="/api/v1")
    return app


@pytest.fixture()
def anon_client():
    return make_supabase_client(data=[make_spot_row()], user_id=None)


@pytest.fixture()
def user_client():
    return make_supabase_client(data=[make_spot_row()])


@pytest.fixture()
def app(anon_client):
    app = create_test_app()
    app.state.anon_client = anon_client
    return app


@pytest.fixture()
def scoped_factory(user_client):
    """Stand-in for ``create_scoped_client`` that returns ``user_client``."""
    return AsyncMock(return_value=user_client)


@pytest.fixture()
def client(app, scoped_factory):
    """
    HTTP client whose bearer requests resolve to ``user_client`` and whose
    anonymous requests resolve to ``anon_client``.
    """
    with patch("spots_api.services.clients.create_scoped_client", scoped_factory):
        transport = ASGITransport(app=app)
        yield AsyncClient(transport=transport, base_url="http://testserver")


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {SAMPLE_TOKEN}"}
