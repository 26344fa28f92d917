"""
Application settings.

Values come from environment variables, optionally loaded from a `.env` file
in the project root.

Environment variables:
- SUPABASE_URL / SUPABASE_KEY: Supabase project URL and server-side key
- CRM_STORAGE_BACKEND: "supabase" or "memory" (defaults to "supabase" when
  SUPABASE_URL is set, otherwise "memory")
- CRM_LOG_LEVEL: logging level name (default INFO)
- CRM_CORS_ORIGINS: comma-separated list of allowed origins (default "*")
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Look for .env in the project root
env_path = Path(__file__).parent.parent / ".env"

STORAGE_BACKENDS = ("supabase", "memory")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    """Validated runtime settings."""

    supabase_url: Optional[str] = Field(default=None, description="Supabase project URL")
    supabase_key: Optional[str] = Field(default=None, description="Supabase server-side API key")
    storage_backend: str = Field(default="memory", description="Row store used by repositories")
    log_level: str = Field(default="INFO")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("storage_backend")
    @classmethod
    def storage_backend_must_be_known(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in STORAGE_BACKENDS:
            raise ValueError(f"storage_backend must be one of {STORAGE_BACKENDS}, got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""

        supabase_url = os.getenv("SUPABASE_URL") or None
        default_backend = "supabase" if supabase_url else "memory"
        origins = os.getenv("CRM_CORS_ORIGINS", "*")

        return cls(
            supabase_url=supabase_url,
            supabase_key=os.getenv("SUPABASE_KEY") or None,
            storage_backend=os.getenv("CRM_STORAGE_BACKEND", default_backend),
            log_level=os.getenv("CRM_LOG_LEVEL", "INFO"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""

    load_dotenv(dotenv_path=env_path)
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls only adjust the level."""

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level)


__all__ = ["Settings", "get_settings", "configure_logging", "STORAGE_BACKENDS"]
