"""
Supabase row store.

Thin wrapper over the supabase-py query builder. It does not enforce any
business rules; it only reads and writes rows and turns Supabase failures
into PersistenceError. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

import httpx
from postgrest.exceptions import APIError

from domain.errors import PersistenceError
from repositories.base_repository import Row, RowStore

logger = logging.getLogger(__name__)


class SupabaseStore(RowStore):
    """RowStore backed by Supabase tables (Postgres)."""

    def __init__(self, client: Any):
        self.client = client

    def _execute(self, query: Any, *, table: str, operation: str) -> List[Row]:
        try:
            response = query.execute()
        except (APIError, httpx.HTTPError) as exc:
            logger.exception(
                "Supabase query failed",
                extra={"table": table, "operation": operation},
            )
            raise PersistenceError(f"Failed to {operation} {table}: {exc}", operation=operation) from exc

        error = getattr(response, "error", None)
        if error:
            logger.error(
                "Supabase query returned an error",
                extra={"table": table, "operation": operation, "error": str(error)},
            )
            raise PersistenceError(f"Failed to {operation} {table}: {error}", operation=operation)

        return list(getattr(response, "data", None) or [])

    def list_rows(self, table: str) -> List[Row]:
        query = self.client.table(table).select("*").order("id")
        return self._execute(query, table=table, operation="list")

    def get_row(self, table: str, row_id: int) -> Optional[Row]:
        query = self.client.table(table).select("*").eq("id", row_id).limit(1)
        rows = self._execute(query, table=table, operation="get")
        return rows[0] if rows else None

    def find_rows(self, table: str, column: str, value: Any) -> List[Row]:
        query = self.client.table(table).select("*").eq(column, value).order("id")
        return self._execute(query, table=table, operation="query")

    def insert_row(self, table: str, payload: Mapping[str, Any]) -> Row:
        query = self.client.table(table).insert(dict(payload))
        rows = self._execute(query, table=table, operation="insert")
        if not rows:
            raise PersistenceError(f"Failed to insert {table}: no row returned", operation="insert")
        return rows[0]

    def update_row(self, table: str, row_id: int, payload: Mapping[str, Any]) -> Optional[Row]:
        query = self.client.table(table).update(dict(payload)).eq("id", row_id)
        rows = self._execute(query, table=table, operation="update")
        return rows[0] if rows else None

    def delete_row(self, table: str, row_id: int) -> bool:
        query = self.client.table(table).delete().eq("id", row_id)
        rows = self._execute(query, table=table, operation="delete")
        return bool(rows)


__all__ = ["SupabaseStore"]
