"""
Base repository (persistence).

Two layers live here:

- `RowStore`: the minimal table/row interface a backing store must offer
  (Supabase in production, memory for development and tests). Rows are
  plain dicts keyed by column name; every table has an integer `id` column
  assigned by the store.
- `EntityRepository`: CRUD for one domain entity on top of a RowStore. It
  validates field sets before any write, maps rows to frozen domain
  entities and raises the domain error taxonomy.

Every write is a single row insert/update/delete, so a failed validation
never leaves a partial record behind.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from domain.errors import NotFound, ValidationError
from domain.time import require_utc_timestamp

T = TypeVar("T")
Row = Dict[str, Any]

logger = logging.getLogger(__name__)


def to_iso_utc(dt: datetime, *, name: str) -> str:
    """Serialize a UTC datetime to ISO-8601 (timezone-aware, offset 0)."""

    require_utc_timestamp(name, dt)
    return dt.astimezone(timezone.utc).isoformat()


def parse_utc_datetime(value: Any) -> datetime:
    """
    Parse a stored timestamp into a timezone-aware UTC datetime.

    Supabase commonly returns ISO-8601 strings, sometimes with a trailing 'Z'.
    """

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")

    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class RowStore(ABC):
    """Table-oriented storage used by every repository."""

    @abstractmethod
    def list_rows(self, table: str) -> List[Row]:
        """Return all rows of a table ordered by id."""

    @abstractmethod
    def get_row(self, table: str, row_id: int) -> Optional[Row]:
        """Return one row or None."""

    @abstractmethod
    def find_rows(self, table: str, column: str, value: Any) -> List[Row]:
        """Return rows whose column equals value, ordered by id."""

    @abstractmethod
    def insert_row(self, table: str, payload: Mapping[str, Any]) -> Row:
        """Insert a row and return it with its new id."""

    @abstractmethod
    def update_row(self, table: str, row_id: int, payload: Mapping[str, Any]) -> Optional[Row]:
        """Update a row in place; None when the id does not exist."""

    @abstractmethod
    def delete_row(self, table: str, row_id: int) -> bool:
        """Delete a row; False when the id does not exist."""


class EntityRepository(Generic[T], ABC):
    """
    CRUD repository for a single entity type.

    Subclasses declare the table, the writable field names and how to
    validate fields, build a row payload, and map a row back to an entity.
    """

    table: str
    entity_name: str
    fields: tuple[str, ...]

    def __init__(self, store: RowStore):
        self.store = store

    # -- hooks -------------------------------------------------------------

    @abstractmethod
    def _validate(self, fields: Mapping[str, Any]) -> Dict[str, str]:
        """Return field errors for a complete field set."""

    @abstractmethod
    def _to_payload(self, fields: Mapping[str, Any]) -> Row:
        """Convert validated fields to storable column values."""

    @abstractmethod
    def _from_row(self, row: Mapping[str, Any]) -> T:
        """Convert a stored row to a domain entity."""

    @abstractmethod
    def _fields_of(self, entity: T) -> Dict[str, Any]:
        """Return the writable fields of an existing entity."""

    def _defaults(self) -> Dict[str, Any]:
        return {}

    def _creation_columns(self) -> Row:
        """Extra columns written only on insert (e.g. creation timestamps)."""
        return {}

    # -- operations --------------------------------------------------------

    def list(self) -> List[T]:
        """Return every entity, id-ascending."""

        return [self._from_row(row) for row in self.store.list_rows(self.table)]

    def get(self, entity_id: int) -> T:
        """
        Return the entity with the given id.

        Raises:
            NotFound: if no such id exists.
        """

        row = self.store.get_row(self.table, entity_id)
        if row is None:
            raise NotFound(self.entity_name, entity_id)
        return self._from_row(row)

    def find(self, entity_id: int) -> Optional[T]:
        """Like get(), but returns None instead of raising."""

        row = self.store.get_row(self.table, entity_id)
        return self._from_row(row) if row is not None else None

    def create(self, fields: Mapping[str, Any]) -> T:
        """
        Validate and insert a new entity.

        Raises:
            ValidationError: if any field is unknown or invalid.
        """

        self._reject_unknown(fields)
        merged = {**self._defaults(), **fields}
        self._raise_for_errors(merged)

        payload = {**self._to_payload(merged), **self._creation_columns()}
        row = self.store.insert_row(self.table, payload)
        entity = self._from_row(row)

        logger.info(
            "Created record",
            extra={"entity": self.entity_name, "entity_id": row["id"], "operation": "create"},
        )
        return entity

    def update(self, entity_id: int, fields: Mapping[str, Any]) -> T:
        """
        Merge fields into an existing entity, re-validate and save.

        Raises:
            NotFound: if the id does not exist.
            ValidationError: if the merged field set is invalid.
        """

        self._reject_unknown(fields)
        existing = self.get(entity_id)
        merged = {**self._fields_of(existing), **fields}
        self._raise_for_errors(merged)

        row = self.store.update_row(self.table, entity_id, self._to_payload(merged))
        if row is None:
            raise NotFound(self.entity_name, entity_id)

        logger.info(
            "Updated record",
            extra={"entity": self.entity_name, "entity_id": entity_id, "operation": "update"},
        )
        return self._from_row(row)

    def delete(self, entity_id: int) -> None:
        """
        Remove an entity.

        Raises:
            NotFound: if the id does not exist.
        """

        if not self.store.delete_row(self.table, entity_id):
            raise NotFound(self.entity_name, entity_id)

        logger.info(
            "Deleted record",
            extra={"entity": self.entity_name, "entity_id": entity_id, "operation": "delete"},
        )

    # -- helpers -----------------------------------------------------------

    def _reject_unknown(self, fields: Mapping[str, Any]) -> None:
        unknown = sorted(set(fields) - set(self.fields))
        if unknown:
            raise ValidationError({name: "Unknown field" for name in unknown})

    def _raise_for_errors(self, fields: Mapping[str, Any]) -> None:
        errors = self._validate(fields)
        if errors:
            logger.debug(
                "Rejected record fields",
                extra={"entity": self.entity_name, "field_errors": errors},
            )
            raise ValidationError(errors)


__all__ = [
    "Row",
    "RowStore",
    "EntityRepository",
    "to_iso_utc",
    "parse_utc_datetime",
]
