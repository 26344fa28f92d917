"""
Display formatting for UK users.

Wire values stay ISO-8601 dates and unitless decimals; these helpers only
produce the strings shown to people.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

_UK_DATE_FORMAT = "%d-%m-%Y"
_PENNY = Decimal("0.01")


def format_uk_date(value: date | datetime) -> str:
    """Format a date as DD-MM-YYYY, e.g. 05-03-2025."""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(_UK_DATE_FORMAT)


def parse_uk_date(text: str) -> date:
    """
    Parse a DD-MM-YYYY string.

    Raises:
        ValueError: if the text is not a real calendar date in that format.
    """
    return datetime.strptime(text.strip(), _UK_DATE_FORMAT).date()


def format_currency(amount: Decimal) -> str:
    """
    Format an amount as pounds sterling, e.g. Decimal("1234.5") -> "£1,234.50".
    """
    rounded = Decimal(amount).quantize(_PENNY, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}£{abs(rounded):,.2f}"


__all__ = ["format_uk_date", "parse_uk_date", "format_currency"]
