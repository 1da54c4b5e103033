"""
Spots API — FastAPI Application
===============================
Geolocated spot records served from Supabase (Postgres + PostGIS).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spots_api.config import get_settings
from spots_api.errors import register_error_handlers
from spots_api.routers import health, spots
from spots_api.services.clients import create_anon_client

logger = logging.getLogger(__name__)
settings = get_settings()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


# ── Lifespan (startup / shutdown) ─────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
        - Configure logging.
        - Build the shared anonymous Supabase client.
    """
    configure_logging(settings.log_level)
    logger.info("%s starting up (env=%s)", settings.app_name, settings.app_env)

    # Created exactly once; request handlers only ever read it.
    app.state.anon_client = await create_anon_client(settings)

    yield

    logger.info("%s shut down.", settings.app_name)


# ── App factory ───────────────────────────────────────────────────
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Geolocated spots with proximity search backed by Supabase/PostGIS.",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS (configurable via CORS_ORIGINS; open by default).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register routers
    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(spots.router, prefix=settings.api_prefix)

    return app


# ── Module-level app instance (for `uvicorn spots_api.main:app`) ──
app = create_app()  # pragma: no cover


def run() -> None:  # pragma: no cover
    """Console entry point: serve the app on ``settings.port``."""
    import uvicorn

    configure_logging(settings.log_level)
    logger.info("API listening on port %d", settings.port)
    uvicorn.run("spots_api.main:app", host="0.0.0.0", port=settings.port)
