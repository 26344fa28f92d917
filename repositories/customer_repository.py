"""
Customer repository (persistence).

Maps the `customers` table to Customer entities and validates contact
fields (required name/email, UK phone and postcode) before every write.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from domain.customer import Customer
from domain.time import utc_now
from domain.validation import validate_customer_fields
from repositories.base_repository import EntityRepository, Row, parse_utc_datetime, to_iso_utc

# Supabase table name for customers.
# Keep this aligned with database/schema.sql.
_CUSTOMERS_TABLE: str = "customers"


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


class CustomerRepository(EntityRepository[Customer]):
    table = _CUSTOMERS_TABLE
    entity_name = "Customer"
    fields = ("name", "email", "phone", "address", "postcode")

    def _validate(self, fields: Mapping[str, Any]) -> Dict[str, str]:
        return validate_customer_fields(fields)

    def _to_payload(self, fields: Mapping[str, Any]) -> Row:
        return {name: _clean(fields.get(name)) for name in self.fields}

    def _creation_columns(self) -> Row:
        return {"created_at_utc": to_iso_utc(utc_now(), name="created_at")}

    def _from_row(self, row: Mapping[str, Any]) -> Customer:
        return Customer(
            id=int(row["id"]),
            name=str(row["name"]),
            email=str(row["email"]),
            phone=row.get("phone") or "",
            address=row.get("address") or "",
            postcode=row.get("postcode") or "",
            created_at=parse_utc_datetime(row["created_at_utc"]),
        )

    def _fields_of(self, entity: Customer) -> Dict[str, Any]:
        return {
            "name": entity.name,
            "email": entity.email,
            "phone": entity.phone,
            "address": entity.address,
            "postcode": entity.postcode,
        }


__all__ = ["CustomerRepository"]
