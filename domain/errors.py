"""
Domain error taxonomy.

Repositories and services raise these; only the API layer translates them
into HTTP responses.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


class CrmError(Exception):
    """Base class for every error the CRM core raises on purpose."""


class ValidationError(CrmError):
    """
    Field-level contract violation.

    Carries a mapping of field name to human-readable message.
    """

    def __init__(self, field_errors: Mapping[str, str]):
        self.field_errors: dict[str, str] = dict(field_errors)
        summary = "; ".join(f"{field}: {message}" for field, message in self.field_errors.items())
        super().__init__(f"Validation failed ({summary})")


class NotFound(CrmError):
    """Requested entity id does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class InvalidReference(CrmError):
    """A sale points at a customer or product that cannot be resolved."""

    def __init__(self, field: str, entity: str, entity_id: Any):
        self.field = field
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{field} references unknown {entity}: {entity_id}")


class ReferenceInUse(CrmError):
    """Delete refused because sales still reference the entity."""

    def __init__(self, entity: str, entity_id: Any, sale_count: int):
        self.entity = entity
        self.entity_id = entity_id
        self.sale_count = sale_count
        super().__init__(
            f"{entity} {entity_id} is referenced by {sale_count} sale(s) and cannot be deleted"
        )


class PersistenceError(CrmError):
    """The underlying store failed. Never retried by the core."""

    def __init__(self, message: str, *, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)


__all__ = [
    "CrmError",
    "ValidationError",
    "NotFound",
    "InvalidReference",
    "ReferenceInUse",
    "PersistenceError",
]
