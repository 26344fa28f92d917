"""
Sale repository (persistence).

This module provides *only* persistence operations for the Sale domain
entity. It checks the stored shape of a sale (ids present, quantity >= 1,
non-negative total, UTC-midnight date) but does not resolve references or
compute totals; the sale service does that before calling in here.
"""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Mapping

from domain.sale import CURRENCY, Sale
from domain.time import require_utc_timestamp
from domain.validation import parse_decimal, parse_quantity, validate_sale_fields
from repositories.base_repository import (
    EntityRepository,
    Row,
    parse_utc_datetime,
    to_iso_utc,
)

# Supabase table name for sale records.
# Keep this aligned with your database schema.
_SALES_TABLE: str = "sales"


class SaleRepository(EntityRepository[Sale]):
    table = _SALES_TABLE
    entity_name = "Sale"
    fields = ("customer_id", "product_id", "quantity", "sale_date", "total_amount")

    def _validate(self, fields: Mapping[str, Any]) -> Dict[str, str]:
        errors = validate_sale_fields(fields)

        sale_date = fields.get("sale_date")
        if "sale_date" not in errors:
            try:
                if not isinstance(sale_date, datetime):
                    raise ValueError("sale_date must be a datetime")
                require_utc_timestamp("sale_date", sale_date)
            except ValueError:
                errors["sale_date"] = "Sale date must be a UTC timestamp"
            else:
                if sale_date.time() != time.min:
                    errors["sale_date"] = "Sale date must be midnight UTC"

        return errors

    def _to_payload(self, fields: Mapping[str, Any]) -> Row:
        return {
            "customer_id": int(fields["customer_id"]),
            "product_id": int(fields["product_id"]),
            "quantity": parse_quantity(fields["quantity"]),
            "sale_date_utc": to_iso_utc(fields["sale_date"], name="sale_date"),
            "total_amount": str(parse_decimal(fields["total_amount"], name="total_amount")),
            "currency": CURRENCY,
        }

    def _from_row(self, row: Mapping[str, Any]) -> Sale:
        return Sale(
            id=int(row["id"]),
            customer_id=int(row["customer_id"]),
            product_id=int(row["product_id"]),
            quantity=int(row["quantity"]),
            sale_date=parse_utc_datetime(row["sale_date_utc"]),
            total_amount=Decimal(str(row["total_amount"])),
            currency=str(row.get("currency") or CURRENCY),
        )

    def _fields_of(self, entity: Sale) -> Dict[str, Any]:
        return {
            "customer_id": entity.customer_id,
            "product_id": entity.product_id,
            "quantity": entity.quantity,
            "sale_date": entity.sale_date,
            "total_amount": entity.total_amount,
        }

    def list_by_customer(self, customer_id: int) -> List[Sale]:
        """Retrieve all sales for a customer (purchase history)."""

        rows = self.store.find_rows(self.table, "customer_id", customer_id)
        return [self._from_row(row) for row in rows]

    def list_by_product(self, product_id: int) -> List[Sale]:
        """Retrieve all sales of a product or service."""

        rows = self.store.find_rows(self.table, "product_id", product_id)
        return [self._from_row(row) for row in rows]


__all__ = ["SaleRepository"]
