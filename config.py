"""
Centralised settings loader.

Every value can be overridden through the environment or a local `.env`
file (field name, case-insensitive, e.g. `GEMINI_API_KEY`).
"""

from __future__ import annotations
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB / auth ────────────────────────────────────────
    env_name: str = "local"
    log_level: str = "INFO"
    database_url: str = "sqlite+aiosqlite:///menugen.db"
    jwt_secret: str = "changeme"
    jwt_ttl_minutes: int = 60 * 24

    # ─── Gemini text generation ─────────────────────────────────────
    gemini_api_key: str | None = None
    gemini_model: str = "models/gemini-2.0-flash"
    generation_temperature: float = 0.7
    generation_max_output_tokens: int = 4000
    generation_timeout_s: float = 120.0

    # ─── orchestration / retention ──────────────────────────────────
    generation_max_attempts: int = 3
    generation_backoff_s: float = 0.0   # 0 → retry immediately
    menu_retention: int = 4
    historical_sample_slack: int = 10

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()


settings: _Settings = _cached()
