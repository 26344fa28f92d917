"""
In-memory row store.

Keeps rows in process memory, primarily for local development and tests.
Rows are copied on the way in and out so callers can never mutate stored
state by accident.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from repositories.base_repository import Row, RowStore

logger = logging.getLogger(__name__)


class InMemoryStore(RowStore):
    """RowStore backed by dictionaries, with per-table id sequences."""

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[int, Row]] = {}
        self._sequences: Dict[str, Iterator[int]] = {}
        logger.info("Using in-memory row store")

    def _table(self, table: str) -> Dict[int, Row]:
        return self._tables.setdefault(table, {})

    def list_rows(self, table: str) -> List[Row]:
        rows = self._table(table)
        return [dict(rows[row_id]) for row_id in sorted(rows)]

    def get_row(self, table: str, row_id: int) -> Optional[Row]:
        row = self._table(table).get(row_id)
        return dict(row) if row is not None else None

    def find_rows(self, table: str, column: str, value: Any) -> List[Row]:
        return [row for row in self.list_rows(table) if row.get(column) == value]

    def insert_row(self, table: str, payload: Mapping[str, Any]) -> Row:
        sequence = self._sequences.setdefault(table, itertools.count(1))
        row_id = next(sequence)
        row = {**payload, "id": row_id}
        self._table(table)[row_id] = row
        return dict(row)

    def update_row(self, table: str, row_id: int, payload: Mapping[str, Any]) -> Optional[Row]:
        rows = self._table(table)
        if row_id not in rows:
            return None
        rows[row_id] = {**rows[row_id], **payload, "id": row_id}
        return dict(rows[row_id])

    def delete_row(self, table: str, row_id: int) -> bool:
        return self._table(table).pop(row_id, None) is not None


__all__ = ["InMemoryStore"]
