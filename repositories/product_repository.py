"""
Product repository (persistence).

Maps the `products` table to Product entities. Prices are stored as decimal
strings so no value ever passes through a binary float.

A product whose recurring mode is None never keeps a renewal price: it is
cleared on write, so switching a product back to one-off billing drops the
old renewal price instead of failing.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Mapping

from domain.product import Product, ProductType, RecurringMode
from domain.validation import parse_decimal, validate_product_fields
from repositories.base_repository import EntityRepository, Row

# Supabase table name for catalog entries.
_PRODUCTS_TABLE: str = "products"


class ProductRepository(EntityRepository[Product]):
    table = _PRODUCTS_TABLE
    entity_name = "Product"
    fields = ("name", "description", "price", "type", "recurring", "renewal_price")

    def _defaults(self) -> Dict[str, Any]:
        return {
            "description": "",
            "type": ProductType.PRODUCT,
            "recurring": RecurringMode.NONE,
            "renewal_price": None,
        }

    def _validate(self, fields: Mapping[str, Any]) -> Dict[str, str]:
        return validate_product_fields(fields)

    def _to_payload(self, fields: Mapping[str, Any]) -> Row:
        recurring = RecurringMode(fields.get("recurring") or RecurringMode.NONE)
        renewal_price = None
        if recurring is not RecurringMode.NONE:
            renewal_price = str(parse_decimal(fields["renewal_price"], name="renewal_price"))

        return {
            "name": str(fields["name"]).strip(),
            "description": str(fields.get("description") or "").strip(),
            "price": str(parse_decimal(fields["price"], name="price")),
            "type": ProductType(fields.get("type") or ProductType.PRODUCT).value,
            "recurring": recurring.value,
            "renewal_price": renewal_price,
        }

    def _from_row(self, row: Mapping[str, Any]) -> Product:
        renewal = row.get("renewal_price")
        return Product(
            id=int(row["id"]),
            name=str(row["name"]),
            description=row.get("description") or "",
            price=Decimal(str(row["price"])),
            type=ProductType(row.get("type") or ProductType.PRODUCT.value),
            recurring=RecurringMode(row.get("recurring") or RecurringMode.NONE.value),
            renewal_price=Decimal(str(renewal)) if renewal is not None else None,
        )

    def _fields_of(self, entity: Product) -> Dict[str, Any]:
        return {
            "name": entity.name,
            "description": entity.description,
            "price": entity.price,
            "type": entity.type,
            "recurring": entity.recurring,
            "renewal_price": entity.renewal_price,
        }


__all__ = ["ProductRepository"]
