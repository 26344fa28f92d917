"""
Pytest configuration.

Adds the project root to the Python path so tests can import domain,
repositories, services and api, forces the in-memory store, and provides
repository/service fixtures backed by a fresh store per test.
"""

import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Never talk to a real Supabase project from the test suite.
os.environ["CRM_STORAGE_BACKEND"] = "memory"

from domain.product import RecurringMode  # noqa: E402
from repositories.customer_repository import CustomerRepository  # noqa: E402
from repositories.memory_store import InMemoryStore  # noqa: E402
from repositories.product_repository import ProductRepository  # noqa: E402
from repositories.sale_repository import SaleRepository  # noqa: E402
from services.sale_service import SaleService  # noqa: E402


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def customers(store):
    return CustomerRepository(store)


@pytest.fixture
def products(store):
    return ProductRepository(store)


@pytest.fixture
def sales(store):
    return SaleRepository(store)


@pytest.fixture
def sale_service(customers, products, sales):
    return SaleService(customers, products, sales)


@pytest.fixture
def customer(customers):
    return customers.create(
        {
            "name": "Jane Smith",
            "email": "jane@example.co.uk",
            "phone": "07700 900000",
            "address": "1 High Street, London",
            "postcode": "SW1A 1AA",
        }
    )


@pytest.fixture
def product(products):
    return products.create({"name": "Widget", "price": Decimal("19.99")})


@pytest.fixture
def subscription(products):
    return products.create(
        {
            "name": "Support plan",
            "type": "Service",
            "price": Decimal("100.00"),
            "recurring": RecurringMode.MONTHLY,
            "renewal_price": Decimal("25.00"),
        }
    )
