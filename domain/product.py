"""
Domain: Catalog entries (products and services).

Contract:
- price is a non-negative decimal.
- renewal_price is set exactly when recurring is not RecurringMode.NONE.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class ProductType(str, Enum):
    PRODUCT = "Product"
    SERVICE = "Service"


class RecurringMode(str, Enum):
    NONE = "None"
    MONTHLY = "Monthly"
    ANNUAL = "Annual"


@dataclass(frozen=True, slots=True)
class Product:
    """
    Product or service offered for sale.

    Recurring items renew on a monthly or annual cadence at renewal_price,
    which is distinct from the one-off price.
    """

    id: int
    name: str
    price: Decimal
    type: ProductType = ProductType.PRODUCT
    description: str = ""
    recurring: RecurringMode = RecurringMode.NONE
    renewal_price: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError("price must be non-negative")
        if self.recurring is RecurringMode.NONE:
            if self.renewal_price is not None:
                raise ValueError("renewal_price must be unset when recurring is None")
        elif self.renewal_price is None or self.renewal_price < 0:
            raise ValueError("renewal_price is required for recurring products")

    @property
    def is_recurring(self) -> bool:
        return self.recurring is not RecurringMode.NONE
