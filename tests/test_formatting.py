"""
Tests for `domain/formatting.py`.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from domain.formatting import format_currency, format_uk_date, parse_uk_date


def test_format_uk_date_from_date_and_datetime() -> None:
    assert format_uk_date(date(2025, 3, 5)) == "05-03-2025"
    assert format_uk_date(datetime(2025, 12, 31, tzinfo=timezone.utc)) == "31-12-2025"


def test_parse_uk_date() -> None:
    assert parse_uk_date("05-03-2025") == date(2025, 3, 5)


@pytest.mark.parametrize("text", ["2025-03-05", "31-02-2025", "5/3/2025", ""])
def test_parse_uk_date_rejects_other_formats(text) -> None:
    with pytest.raises(ValueError):
        parse_uk_date(text)


def test_format_currency() -> None:
    assert format_currency(Decimal("59.97")) == "£59.97"
    assert format_currency(Decimal("1234.5")) == "£1,234.50"
    assert format_currency(Decimal("0")) == "£0.00"
    assert format_currency(Decimal("-5")) == "-£5.00"
    assert format_currency(Decimal("0.005")) == "£0.01"
