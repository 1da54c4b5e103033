"""
Supabase Client Resolution
==========================
Chooses the data-access handle a request runs under.

Identity Model
--------------
Row-level security lives in the database, so the *handle's* identity decides
which spots are visible or writable; this module never filters rows itself.

- **Authenticated** requests (``Authorization: Bearer <jwt>``) get a fresh
  ``AsyncClient`` that forwards the caller's JWT on every PostgREST / RPC /
  auth call.  These clients are built per request and never cached: tokens
  are short-lived and two concurrent callers must never share one.  Each
  one sends through a request-owned ``httpx.AsyncClient`` that is closed
  when the request finishes.
- **Anonymous** requests share one process-wide client configured with the
  anon key.  It is created once in the application lifespan, stored on
  ``app.state.anon_client`` and never mutated afterwards, which makes it safe
  to reuse across concurrent requests.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

import httpx
from fastapi import Header, Request
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from spots_api.config import Settings, get_settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True, slots=True)
class ScopedClient:
    """A Supabase client plus the caller credential it was built for."""

    client: AsyncClient
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None


def extract_bearer(authorization: str | None) -> str | None:
    """Return the token of a ``Bearer`` header, or ``None``."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


async def create_anon_client(settings: Settings) -> AsyncClient:
    """Build the shared low-privilege client.  Call once per process."""
    client = await acreate_client(settings.supabase_url, settings.supabase_anon_key)
    logger.info("Supabase anon client initialised (url=%s)", settings.supabase_url)
    return client


async def create_scoped_client(
    settings: Settings,
    token: str,
    http_client: httpx.AsyncClient,
) -> AsyncClient:
    """
    Build a client that presents *token* on every remote call.

    All of its sub-clients (auth, PostgREST) send through *http_client*,
    which the caller owns and must close.
    """
    options = AsyncClientOptions(
        headers={"Authorization": f"{BEARER_PREFIX}{token}"},
        httpx_client=http_client,
    )
    return await acreate_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=options,
    )


def get_anon_client(request: Request) -> AsyncClient:
    """Read-only accessor for the lifespan-created anonymous client."""
    client = getattr(request.app.state, "anon_client", None)
    if client is None:
        raise RuntimeError("Supabase anon client is not initialised")
    return client


async def get_scoped_client(
    request: Request,
    authorization: str | None = Header(default=None),
) -> AsyncIterator[ScopedClient]:
    """
    FastAPI dependency — yields the handle for this request.

    A bearer credential yields a fresh identity-scoped client backed by its
    own ``httpx.AsyncClient``; that connection pool is closed once the
    response is done, whatever the outcome.  Otherwise the shared anonymous
    client is yielded with ``token=None`` and left open.
    """
    token = extract_bearer(authorization)
    if token is None:
        yield ScopedClient(client=get_anon_client(request))
        return

    settings = get_settings()
    http_client = httpx.AsyncClient(timeout=settings.supabase_timeout)
    try:
        client = await create_scoped_client(settings, token, http_client)
        yield ScopedClient(client=client, token=token)
    finally:
        await http_client.aclose()
