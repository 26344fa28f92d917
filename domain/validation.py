"""
Field validation rules (pure).

UK-specific contact formats plus the numeric rules used by products and
sales. Predicates return booleans and never raise for ordinary invalid
input. The `parse_*` helpers raise `NotANumberError` when a numeric parse is
attempted on malformed input, so callers can tell "not a number" apart from
"a number out of range".

The `validate_*_fields` functions return a `{field: message}` mapping that is
empty when everything is valid.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from .product import ProductType, RecurringMode

_POSTCODE_RE = re.compile(r"^[A-Z]{1,2}[0-9][A-Z0-9]? ?[0-9][A-Z]{2}$", re.IGNORECASE)
_PHONE_RE = re.compile(r"^(\+44|0)\d{10}$")
_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")
_WHITESPACE_RE = re.compile(r"\s")

# Money is stored to the penny.
MONEY_DECIMAL_PLACES = 2

# Column limits: numeric(12, 2) prices, numeric(14, 2) totals, integer quantities.
MAX_PRICE = Decimal("10000000000")
MAX_TOTAL = Decimal("1000000000000")
MAX_QUANTITY = 2**31 - 1


class NotANumberError(ValueError):
    """Raised when input that should be numeric cannot be parsed."""


def _is_blank(value: Optional[str]) -> bool:
    return value is None or str(value).strip() == ""


def is_valid_postcode(postcode: Optional[str]) -> bool:
    """
    Check a UK postcode, e.g. "SW1A 1AA" or "m11ae".

    The field is optional: None or an empty string is valid.
    """
    if _is_blank(postcode):
        return True
    return bool(_POSTCODE_RE.match(str(postcode).strip()))


def is_valid_phone(phone: Optional[str]) -> bool:
    """
    Check a UK phone number: "0" or "+44" followed by ten digits.

    Whitespace anywhere in the number is ignored. Optional field.
    """
    if _is_blank(phone):
        return True
    return bool(_PHONE_RE.match(_WHITESPACE_RE.sub("", str(phone))))


def is_valid_email(email: Optional[str]) -> bool:
    """Check a `local@domain.tld` shaped address. Required field."""
    if _is_blank(email):
        return False
    return bool(_EMAIL_RE.match(str(email).strip()))


def parse_decimal(value: Any, *, name: str = "value") -> Decimal:
    """
    Parse a number into a Decimal without going through binary floats.

    Floats are converted via their shortest repr, so 19.99 becomes
    Decimal("19.99") rather than the nearest binary fraction.

    Raises:
        NotANumberError: for booleans, blank strings, non-numeric text,
            NaN and infinities.
    """
    if isinstance(value, bool) or value is None:
        raise NotANumberError(f"{name} must be a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        text = str(value).strip()
        if not text:
            raise NotANumberError(f"{name} must be a number")
        try:
            result = Decimal(text)
        except InvalidOperation as exc:
            raise NotANumberError(f"{name} must be a number, got {value!r}") from exc

    if not result.is_finite():
        raise NotANumberError(f"{name} must be a finite number")
    return result


def parse_quantity(value: Any) -> int:
    """
    Parse a quantity into an int.

    Accepts ints, integral Decimals/floats (3.0) and digit strings.

    Raises:
        NotANumberError: if the value is not a whole number.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = parse_decimal(value, name="quantity")
    if number != number.to_integral_value():
        raise NotANumberError(f"quantity must be a whole number, got {value!r}")
    return int(number)


def is_valid_price(value: Any) -> bool:
    """True when the value parses as a finite number >= 0."""
    try:
        return parse_decimal(value, name="price") >= 0
    except NotANumberError:
        return False


def is_valid_quantity(value: Any) -> bool:
    """True when the value is a whole number >= 1."""
    try:
        return parse_quantity(value) >= 1
    except NotANumberError:
        return False


def has_money_precision(amount: Decimal) -> bool:
    """True when the amount has no more than two decimal places."""
    exponent = amount.normalize().as_tuple().exponent
    return not isinstance(exponent, int) or exponent >= -MONEY_DECIMAL_PLACES


def _price_error(value: Any, label: str, maximum: Decimal = MAX_PRICE) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return f"{label} is required"
    try:
        amount = parse_decimal(value, name=label)
    except NotANumberError:
        return f"{label} must be a valid number"
    if amount < 0:
        return f"{label} must not be negative"
    if amount >= maximum:
        return f"{label} must be less than {maximum:,}"
    if not has_money_precision(amount):
        return f"{label} cannot have more than {MONEY_DECIMAL_PLACES} decimal places"
    return None


def validate_customer_fields(fields: Mapping[str, Any]) -> dict[str, str]:
    """Validate a complete set of customer fields."""
    errors: dict[str, str] = {}

    if _is_blank(fields.get("name")):
        errors["name"] = "Name is required"

    email = fields.get("email")
    if _is_blank(email):
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Invalid email format"

    if not is_valid_phone(fields.get("phone")):
        errors["phone"] = "Invalid UK phone number format"

    if not is_valid_postcode(fields.get("postcode")):
        errors["postcode"] = "Invalid UK postcode format"

    return errors


def validate_product_fields(fields: Mapping[str, Any]) -> dict[str, str]:
    """
    Validate a complete set of product fields.

    renewal_price is only checked when recurring is Monthly or Annual.
    """
    errors: dict[str, str] = {}

    if _is_blank(fields.get("name")):
        errors["name"] = "Name is required"

    price_error = _price_error(fields.get("price"), "Price")
    if price_error:
        errors["price"] = price_error

    product_type = fields.get("type", ProductType.PRODUCT)
    try:
        ProductType(product_type)
    except ValueError:
        errors["type"] = "Type must be one of: " + ", ".join(t.value for t in ProductType)

    recurring = fields.get("recurring", RecurringMode.NONE)
    try:
        recurring_mode = RecurringMode(recurring if recurring is not None else RecurringMode.NONE)
    except ValueError:
        errors["recurring"] = "Recurring must be one of: " + ", ".join(m.value for m in RecurringMode)
        recurring_mode = None

    if recurring_mode is not None and recurring_mode is not RecurringMode.NONE:
        renewal_error = _price_error(fields.get("renewal_price"), "Renewal price")
        if renewal_error:
            errors["renewal_price"] = renewal_error

    return errors


def validate_sale_fields(fields: Mapping[str, Any]) -> dict[str, str]:
    """Validate the stored shape of a sale (ids, quantity, total)."""
    errors: dict[str, str] = {}

    for field, label in (("customer_id", "Customer"), ("product_id", "Product/Service")):
        value = fields.get(field)
        if value is None or isinstance(value, bool) or not isinstance(value, int):
            errors[field] = f"{label} is required"

    quantity = fields.get("quantity")
    if not is_valid_quantity(quantity):
        errors["quantity"] = "Quantity must be at least 1"
    elif parse_quantity(quantity) > MAX_QUANTITY:
        errors["quantity"] = f"Quantity must be at most {MAX_QUANTITY:,}"

    if fields.get("sale_date") is None:
        errors["sale_date"] = "Sale date is required"

    total_error = _price_error(fields.get("total_amount"), "Total amount", MAX_TOTAL)
    if total_error:
        errors["total_amount"] = total_error

    return errors


__all__ = [
    "MONEY_DECIMAL_PLACES",
    "MAX_PRICE",
    "MAX_TOTAL",
    "MAX_QUANTITY",
    "NotANumberError",
    "is_valid_postcode",
    "is_valid_phone",
    "is_valid_email",
    "is_valid_price",
    "is_valid_quantity",
    "has_money_precision",
    "parse_decimal",
    "parse_quantity",
    "validate_customer_fields",
    "validate_product_fields",
    "validate_sale_fields",
]
