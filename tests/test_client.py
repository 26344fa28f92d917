"""
Tests for `repositories/client.py` store selection.
"""

from __future__ import annotations

import pytest

import repositories.client as client_module
from config.settings import Settings
from domain.errors import PersistenceError
from repositories.memory_store import InMemoryStore


@pytest.fixture(autouse=True)
def clear_caches():
    client_module.get_row_store.cache_clear()
    client_module.get_supabase_client.cache_clear()
    yield
    client_module.get_row_store.cache_clear()
    client_module.get_supabase_client.cache_clear()


def test_memory_backend_returns_shared_in_memory_store(monkeypatch) -> None:
    monkeypatch.setattr(client_module, "get_settings", lambda: Settings(storage_backend="memory"))

    store = client_module.get_row_store()

    assert isinstance(store, InMemoryStore)
    assert client_module.get_row_store() is store


def test_supabase_backend_requires_url(monkeypatch) -> None:
    monkeypatch.setattr(client_module, "get_settings", lambda: Settings(storage_backend="supabase"))

    with pytest.raises(PersistenceError, match="SUPABASE_URL"):
        client_module.get_row_store()


def test_supabase_backend_requires_key(monkeypatch) -> None:
    settings = Settings(storage_backend="supabase", supabase_url="https://example.supabase.co")
    monkeypatch.setattr(client_module, "get_settings", lambda: settings)

    with pytest.raises(PersistenceError, match="SUPABASE_KEY"):
        client_module.get_supabase_client()
