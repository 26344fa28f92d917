"""
Domain: Sale records.

Contract excerpts relevant here:
- A sale references exactly one customer and one product by id.
- total_amount equals product price x quantity at the time of save. The
  sale service recomputes it; this entity only stores the result.
- sale_date is the UTC midnight of the calendar day the sale happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal

from .time import require_utc_timestamp

CURRENCY = "GBP"


@dataclass(frozen=True, slots=True)
class Sale:
    """
    Immutable record of a sale.

    Captures:
    - Who bought (customer_id)
    - What was bought and how many (product_id, quantity)
    - When (sale_date)
    - How much was charged (total_amount, always GBP)
    """

    id: int
    customer_id: int
    product_id: int
    quantity: int
    sale_date: datetime
    total_amount: Decimal
    currency: str = CURRENCY

    def __post_init__(self) -> None:
        require_utc_timestamp("sale_date", self.sale_date)
        if self.sale_date.time() != time.min:
            raise ValueError("sale_date must be midnight UTC")
        if self.quantity < 1:
            raise ValueError("quantity must be at least 1")
        if self.total_amount < 0:
            raise ValueError("total_amount must be non-negative")

    @property
    def sale_day(self) -> date:
        return self.sale_date.date()
