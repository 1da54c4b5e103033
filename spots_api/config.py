"""
Spots API — Configuration via pydantic-settings.

Environment variables override defaults.  The Supabase URL and anon key are
the only credentials the process holds; caller credentials arrive per request.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import ClassVar

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    env_path: ClassVar[str] = str(Path(__file__).resolve().parents[1] / ".env")
    model_config = SettingsConfigDict(
        env_file=env_path,
        env_file_encoding="utf-8",
        # Ignore unrelated environment variables (the Supabase CLI writes
        # several of its own into .env).
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────
    app_name: str = "Spots API"
    # Runtime environment label reported by /health.
    app_env: str = "development"
    api_prefix: str = "/api/v1"
    port: int = 3000
    log_level: str = "INFO"

    # ── Supabase ───────────────────────────────────────────────────
    supabase_url: str = "http://localhost:54321"
    # Low-privilege key used by the shared anonymous client.
    supabase_anon_key: str = ""
    # Seconds; applies to the per-request HTTP pool of authenticated clients.
    supabase_timeout: float = 120.0

    # ── CORS ───────────────────────────────────────────────────────
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse the comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
