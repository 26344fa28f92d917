"""
Domain: Customer records.

A customer is anyone the business sells to. Contact fields follow UK
conventions; see `domain.validation` for the accepted formats.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .time import require_utc_timestamp


@dataclass(frozen=True, slots=True)
class Customer:
    """
    Customer with contact details.

    Phone, address and postcode are optional and stored as empty strings
    when not supplied.
    """

    id: int
    name: str
    email: str
    created_at: datetime
    phone: str = ""
    address: str = ""
    postcode: str = ""

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)
