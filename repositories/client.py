"""
Store client initialization.

This module contains *only* the connection setup. Repositories receive a
RowStore; `get_row_store()` picks the Supabase store or the in-memory store
from settings.

Environment variables (see config.settings):
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
- CRM_STORAGE_BACKEND: "supabase" or "memory"
"""

from __future__ import annotations

from functools import lru_cache

# The dependency is `supabase` (supabase-py). If your editor can't resolve it,
# install it in your environment: `pip install supabase`.
from supabase import Client, create_client  # type: ignore[import-not-found]

from config.settings import get_settings
from domain.errors import PersistenceError
from repositories.base_repository import RowStore
from repositories.memory_store import InMemoryStore
from repositories.supabase_store import SupabaseStore


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Create the Supabase client once, failing fast on missing credentials."""

    settings = get_settings()

    if not settings.supabase_url:
        raise PersistenceError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )

    if not settings.supabase_key:
        raise PersistenceError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )

    return create_client(settings.supabase_url, settings.supabase_key)


@lru_cache(maxsize=1)
def get_row_store() -> RowStore:
    """Return the process-wide row store for the configured backend."""

    if get_settings().storage_backend == "supabase":
        return SupabaseStore(get_supabase_client())
    return InMemoryStore()


__all__ = ["get_supabase_client", "get_row_store"]
