"""
Centralised settings loader.

Every field maps to the upper-cased env-var of the same name
(``GEMINI_API_KEY``, ``KNOWLEDGE_BASE_PATH`` …); a local ``.env`` is read too.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime ─────────────────────────────────────────────────────
    env_name: str = "local"
    log_level: str = "INFO"

    # ─── curated datasets (bundled JSON when unset) ─────────────────
    knowledge_base_path: str | None = None

    # ─── Gemini ─────────────────────────────────────────────────────
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.7

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
