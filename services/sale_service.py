"""
Sale service for recording and amending sales.

Handles:
- Resolving the customer and product a sale points at
- Quantity and sale date validation
- Server-side total calculation (client-supplied totals are discarded)
- A single repository write per create/update, so a rejected request
  never leaves a partial record
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, List, Optional

from domain.customer import Customer
from domain.errors import InvalidReference, ValidationError
from domain.formatting import parse_uk_date
from domain.product import Product
from domain.sale import Sale
from domain.time import utc_midnight
from domain.validation import MAX_QUANTITY, MAX_TOTAL, NotANumberError, parse_decimal, parse_quantity
from repositories.customer_repository import CustomerRepository
from repositories.product_repository import ProductRepository
from repositories.sale_repository import SaleRepository
from services.pricing_service import compute_total

logger = logging.getLogger(__name__)


def parse_sale_date(value: Any) -> date:
    """
    Parse a sale date into a calendar date.

    Accepts date objects, datetimes (converted to UTC first), ISO strings
    ("2025-03-05" or "2025-03-05T00:00:00Z") and UK strings ("05-03-2025").

    Raises:
        ValidationError: If the value is missing or not a real calendar date
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError({"sale_date": "Sale date is required"})

    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            try:
                value = value.astimezone(timezone.utc)
            except (OverflowError, ValueError):
                raise ValidationError({"sale_date": f"Invalid sale date: {value.isoformat()!r}"}) from None
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return parse_sale_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass
    try:
        return parse_uk_date(text)
    except ValueError:
        raise ValidationError({"sale_date": f"Invalid sale date: {text!r}"}) from None


def _require_quantity(quantity: Any) -> int:
    try:
        units = parse_quantity(quantity)
    except NotANumberError:
        raise ValidationError({"quantity": "Quantity must be a whole number"}) from None
    if units < 1:
        raise ValidationError({"quantity": "Quantity must be at least 1"})
    if units > MAX_QUANTITY:
        raise ValidationError({"quantity": f"Quantity must be at most {MAX_QUANTITY:,}"})
    return units


class SaleService:
    """
    Coordinates customer, product and sale repositories for sale writes.

    Example:
        service = SaleService(customers, products, sales)
        sale = service.create_sale(customer_id=1, product_id=2, quantity=3, sale_date="2025-03-05")
        print(f"Total: {sale.total_amount}")
    """

    def __init__(
        self,
        customers: CustomerRepository,
        products: ProductRepository,
        sales: SaleRepository,
    ):
        self.customers = customers
        self.products = products
        self.sales = sales

    # -- reference resolution ---------------------------------------------

    def _resolve_customer(self, customer_id: Any) -> Customer:
        if customer_id is None:
            raise ValidationError({"customer_id": "Customer is required"})
        customer = self.customers.find(customer_id)
        if customer is None:
            raise InvalidReference("customer_id", "Customer", customer_id)
        return customer

    def _resolve_product(self, product_id: Any) -> Product:
        if product_id is None:
            raise ValidationError({"product_id": "Product/Service is required"})
        product = self.products.find(product_id)
        if product is None:
            raise InvalidReference("product_id", "Product", product_id)
        return product

    def _price(self, product: Product, quantity: int, client_total: Any) -> Decimal:
        total = compute_total(product.price, quantity)
        if total >= MAX_TOTAL:
            raise ValidationError({"quantity": f"Sale total must be less than {MAX_TOTAL:,}"})

        if client_total is not None:
            try:
                submitted = parse_decimal(client_total, name="total_amount")
            except NotANumberError:
                submitted = None
            if submitted != total:
                logger.warning(
                    "Discarding client-supplied sale total",
                    extra={
                        "product_id": product.id,
                        "quantity": quantity,
                        "submitted_total": str(client_total),
                        "computed_total": str(total),
                    },
                )
        return total

    # -- operations --------------------------------------------------------

    def create_sale(
        self,
        customer_id: int,
        product_id: int,
        quantity: Any,
        sale_date: Any,
        total_amount: Any = None,
    ) -> Sale:
        """
        Record a new sale.

        Process:
        1. Resolve customer (InvalidReference if absent)
        2. Resolve product (InvalidReference if absent)
        3. Validate quantity >= 1 (ValidationError)
        4. Parse sale_date, stored as UTC midnight (ValidationError)
        5. total = product.price x quantity; any total_amount from the
           caller is ignored
        6. Persist with one insert

        Returns:
            The stored Sale
        """
        customer = self._resolve_customer(customer_id)
        product = self._resolve_product(product_id)
        units = _require_quantity(quantity)
        day = parse_sale_date(sale_date)
        total = self._price(product, units, total_amount)

        sale = self.sales.create(
            {
                "customer_id": customer.id,
                "product_id": product.id,
                "quantity": units,
                "sale_date": utc_midnight(day),
                "total_amount": total,
            }
        )
        logger.info(
            "Recorded sale",
            extra={"sale_id": sale.id, "customer_id": customer.id, "product_id": product.id, "total": str(total)},
        )
        return sale

    def update_sale(
        self,
        sale_id: int,
        customer_id: Optional[int] = None,
        product_id: Optional[int] = None,
        quantity: Any = None,
        sale_date: Any = None,
        total_amount: Any = None,
    ) -> Sale:
        """
        Amend an existing sale.

        Omitted arguments keep their stored values. The customer and product
        are always re-resolved, because either may have been deleted since
        the sale was recorded, and the total is recomputed from the product's
        current price.

        Raises:
            NotFound: If the sale does not exist
            InvalidReference: If the customer or product no longer resolves
            ValidationError: For a bad quantity or sale date
        """
        existing = self.sales.get(sale_id)

        customer = self._resolve_customer(customer_id if customer_id is not None else existing.customer_id)
        product = self._resolve_product(product_id if product_id is not None else existing.product_id)
        units = _require_quantity(quantity if quantity is not None else existing.quantity)
        day = parse_sale_date(sale_date if sale_date is not None else existing.sale_date)
        total = self._price(product, units, total_amount)

        return self.sales.update(
            sale_id,
            {
                "customer_id": customer.id,
                "product_id": product.id,
                "quantity": units,
                "sale_date": utc_midnight(day),
                "total_amount": total,
            },
        )

    def get_sale(self, sale_id: int) -> Sale:
        return self.sales.get(sale_id)

    def list_sales(self) -> List[Sale]:
        return self.sales.list()

    def delete_sale(self, sale_id: int) -> None:
        self.sales.delete(sale_id)


__all__ = [
    "SaleService",
    "parse_sale_date",
]
