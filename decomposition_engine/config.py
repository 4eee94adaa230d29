"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Every setting has a default: the engine works with no environment at all

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - disable_decomposition_logging maps to DISABLE_DECOMPOSITION_LOGGING: silences
      per-action summaries only, never warnings or errors
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Engine
    disable_decomposition_logging: bool = False
    # ADR: cycles are prevented at write time; depth computation falls back to 0
    # on a revisit unless strict mode asks it to fail loudly
    strict_depth_cycles: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
