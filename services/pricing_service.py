"""
Pricing service for sale totals and renewals.

All arithmetic uses Decimal. Floats are only ever converted through their
string form, so 19.99 x 3 is exactly 59.97.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from domain.product import Product, RecurringMode
from domain.validation import parse_decimal, parse_quantity

Number = Union[Decimal, int, float, str]


def compute_total(unit_price: Number, quantity: Union[int, str]) -> Decimal:
    """
    Calculate a sale total as unit price x quantity.

    Args:
        unit_price: Product price (non-negative)
        quantity: Number of units (non-negative)

    Returns:
        Total as Decimal

    Raises:
        ValueError: If either input is negative or not a number

    Example:
        compute_total(Decimal("19.99"), 3)
        # Returns Decimal('59.97')
    """
    price = parse_decimal(unit_price, name="unit_price")
    units = parse_quantity(quantity)

    if price < 0:
        raise ValueError(f"unit_price must be non-negative, got {price}")
    if units < 0:
        raise ValueError(f"quantity must be non-negative, got {units}")

    return price * units


def compute_renewal(recurring: Union[RecurringMode, str], renewal_price: Optional[Number]) -> Optional[Decimal]:
    """
    Get the amount charged on each renewal of a recurring product.

    Returns None for one-off products (recurring None). Otherwise the renewal
    price is returned unchanged; there is no proration.

    Raises:
        ValueError: If the product recurs but has no renewal price
    """
    mode = RecurringMode(recurring)
    if mode is RecurringMode.NONE:
        return None
    if renewal_price is None:
        raise ValueError(f"renewal_price is required for {mode.value} billing")
    return parse_decimal(renewal_price, name="renewal_price")


def renewal_for_product(product: Product) -> Optional[Decimal]:
    """Shortcut for compute_renewal on a stored product."""
    return compute_renewal(product.recurring, product.renewal_price)


__all__ = [
    "compute_total",
    "compute_renewal",
    "renewal_for_product",
]
