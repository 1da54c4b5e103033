"""Services subpackage — Supabase client resolution and spot operations."""

from spots_api.services.clients import (
    ScopedClient,
    create_anon_client,
    create_scoped_client,
    extract_bearer,
    get_anon_client,
    get_scoped_client,
)
from spots_api.services.spots import SpotRepository

__all__ = [
    "ScopedClient",
    "create_anon_client",
    "create_scoped_client",
    "extract_bearer",
    "get_anon_client",
    "get_scoped_client",
    "SpotRepository",
]
