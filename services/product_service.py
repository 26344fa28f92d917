"""
Product service.

CRUD for the catalog, renewal pricing lookups, and a restrict-delete policy:
a product or service that has been sold cannot be deleted.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from domain.errors import ReferenceInUse
from domain.product import Product
from repositories.product_repository import ProductRepository
from repositories.sale_repository import SaleRepository
from services.pricing_service import renewal_for_product

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, products: ProductRepository, sales: SaleRepository):
        self.products = products
        self.sales = sales

    def list_products(self) -> List[Product]:
        return self.products.list()

    def get_product(self, product_id: int) -> Product:
        return self.products.get(product_id)

    def create_product(self, fields: Mapping[str, Any]) -> Product:
        return self.products.create(fields)

    def update_product(self, product_id: int, fields: Mapping[str, Any]) -> Product:
        """
        Update catalog fields.

        Existing sales keep the total they were saved with; only sales
        created or amended afterwards use the new price.
        """
        return self.products.update(product_id, fields)

    def renewal_amount(self, product_id: int) -> Optional[Decimal]:
        """Amount charged per renewal, or None for one-off items."""
        return renewal_for_product(self.products.get(product_id))

    def delete_product(self, product_id: int) -> None:
        """
        Delete a product that has never been sold.

        Raises:
            NotFound: If the product does not exist
            ReferenceInUse: If any sale references the product
        """
        product = self.products.get(product_id)
        referencing = self.sales.list_by_product(product.id)
        if referencing:
            logger.warning(
                "Refusing to delete product with sales",
                extra={"product_id": product.id, "sale_count": len(referencing)},
            )
            raise ReferenceInUse("Product", product.id, len(referencing))
        self.products.delete(product.id)


__all__ = ["ProductService"]
