"""
Tests for `repositories/supabase_store.py`.

Uses a recording stand-in for the supabase-py query builder so no network
access is needed.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional

import httpx
import pytest
from postgrest.exceptions import APIError

from domain.errors import PersistenceError
from repositories.product_repository import ProductRepository
from repositories.supabase_store import SupabaseStore


class FakeResponse:
    def __init__(self, data: Optional[List[dict]] = None, error: Any = None):
        self.data = data
        self.error = error


class FakeQuery:
    def __init__(self, client: "FakeClient", table: str):
        self.client = client
        self.table = table
        self.calls: List[tuple] = []

    def _record(self, name: str, *args: Any) -> "FakeQuery":
        self.calls.append((name, *args))
        return self

    def select(self, columns: str) -> "FakeQuery":
        return self._record("select", columns)

    def eq(self, column: str, value: Any) -> "FakeQuery":
        return self._record("eq", column, value)

    def order(self, column: str) -> "FakeQuery":
        return self._record("order", column)

    def limit(self, count: int) -> "FakeQuery":
        return self._record("limit", count)

    def insert(self, payload: dict) -> "FakeQuery":
        return self._record("insert", payload)

    def update(self, payload: dict) -> "FakeQuery":
        return self._record("update", payload)

    def delete(self) -> "FakeQuery":
        return self._record("delete")

    def execute(self) -> FakeResponse:
        outcome = self.client.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeClient:
    def __init__(self, *outcomes: Any):
        self.outcomes = list(outcomes)
        self.queries: List[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query


def test_list_rows_orders_by_id() -> None:
    client = FakeClient(FakeResponse([{"id": 1}, {"id": 2}]))

    rows = SupabaseStore(client).list_rows("customers")

    assert rows == [{"id": 1}, {"id": 2}]
    assert client.queries[0].table == "customers"
    assert client.queries[0].calls == [("select", "*"), ("order", "id")]


def test_get_row_returns_first_or_none() -> None:
    client = FakeClient(FakeResponse([{"id": 3}]), FakeResponse([]))
    store = SupabaseStore(client)

    assert store.get_row("sales", 3) == {"id": 3}
    assert store.get_row("sales", 4) is None
    assert client.queries[0].calls == [("select", "*"), ("eq", "id", 3), ("limit", 1)]


def test_find_rows_filters_by_column() -> None:
    client = FakeClient(FakeResponse([{"id": 1, "customer_id": 9}]))

    rows = SupabaseStore(client).find_rows("sales", "customer_id", 9)

    assert rows == [{"id": 1, "customer_id": 9}]
    assert ("eq", "customer_id", 9) in client.queries[0].calls


def test_insert_update_delete() -> None:
    client = FakeClient(
        FakeResponse([{"id": 5, "name": "A"}]),
        FakeResponse([{"id": 5, "name": "B"}]),
        FakeResponse([]),
        FakeResponse([{"id": 5}]),
        FakeResponse([]),
    )
    store = SupabaseStore(client)

    assert store.insert_row("customers", {"name": "A"}) == {"id": 5, "name": "A"}
    assert store.update_row("customers", 5, {"name": "B"}) == {"id": 5, "name": "B"}
    assert store.update_row("customers", 6, {"name": "B"}) is None
    assert store.delete_row("customers", 5) is True
    assert store.delete_row("customers", 5) is False
    assert client.queries[3].calls == [("delete",), ("eq", "id", 5)]


def test_insert_without_returned_row_is_a_persistence_error() -> None:
    client = FakeClient(FakeResponse([]))
    with pytest.raises(PersistenceError):
        SupabaseStore(client).insert_row("customers", {"name": "A"})


def test_response_error_becomes_persistence_error() -> None:
    client = FakeClient(FakeResponse(error="relation \"sales\" does not exist"))

    with pytest.raises(PersistenceError) as exc_info:
        SupabaseStore(client).list_rows("sales")

    assert exc_info.value.operation == "list"


def test_api_error_becomes_persistence_error() -> None:
    client = FakeClient(APIError({"message": "permission denied", "code": "42501", "hint": None, "details": None}))

    with pytest.raises(PersistenceError):
        SupabaseStore(client).get_row("customers", 1)


def test_connection_failure_is_not_retried() -> None:
    client = FakeClient(httpx.ConnectError("connection refused"), FakeResponse([{"id": 1}]))

    with pytest.raises(PersistenceError):
        SupabaseStore(client).list_rows("customers")

    assert len(client.queries) == 1


def test_repository_maps_supabase_rows() -> None:
    row = {
        "id": 2,
        "name": "Support plan",
        "description": None,
        "price": 100.0,
        "type": "Service",
        "recurring": "Annual",
        "renewal_price": "80.00",
    }
    client = FakeClient(FakeResponse([row]))

    product = ProductRepository(SupabaseStore(client)).get(2)

    assert product.price == Decimal("100.0")
    assert product.renewal_price == Decimal("80.00")
    assert product.description == ""
