"""
Tests for the entity repositories over the in-memory store.

Covers contract rules:
- get() raises NotFound for unknown ids and is idempotent.
- create()/update() validate before writing; nothing is stored on failure.
- update() merges fields and re-validates.
- delete() raises NotFound for unknown ids.
- Recurring products need a renewal price; one-off products drop it.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from domain.errors import NotFound, ValidationError
from domain.product import ProductType, RecurringMode
from domain.time import utc_midnight


class TestCustomerRepository:
    def test_create_assigns_id_and_timestamp(self, customers, customer):
        assert customer.id == 1
        assert customer.created_at.tzinfo is not None
        assert customer.postcode == "SW1A 1AA"
        assert customers.list() == [customer]

    def test_ids_are_unique_and_ascending(self, customers, customer):
        second = customers.create({"name": "John", "email": "john@example.com"})
        assert second.id == customer.id + 1
        assert [c.id for c in customers.list()] == [customer.id, second.id]

    def test_optional_fields_default_to_empty(self, customers):
        created = customers.create({"name": "John", "email": "john@example.com"})
        assert (created.phone, created.address, created.postcode) == ("", "", "")

    def test_create_rejects_invalid_fields_without_persisting(self, customers):
        with pytest.raises(ValidationError) as exc_info:
            customers.create({"name": "John", "email": "not-an-email", "postcode": "12345"})

        assert set(exc_info.value.field_errors) == {"email", "postcode"}
        assert customers.list() == []

    def test_create_rejects_unknown_fields(self, customers):
        with pytest.raises(ValidationError) as exc_info:
            customers.create({"name": "John", "email": "john@example.com", "vip": True})
        assert exc_info.value.field_errors == {"vip": "Unknown field"}

    def test_get_is_idempotent(self, customers, customer):
        assert customers.get(customer.id) == customers.get(customer.id) == customer

    def test_get_missing_raises_not_found(self, customers):
        with pytest.raises(NotFound):
            customers.get(999)

    def test_update_merges_fields(self, customers, customer):
        updated = customers.update(customer.id, {"phone": "+44 20 7946 0958"})

        assert updated.phone == "+44 20 7946 0958"
        assert updated.name == customer.name
        assert updated.created_at == customer.created_at

    def test_update_revalidates(self, customers, customer):
        with pytest.raises(ValidationError) as exc_info:
            customers.update(customer.id, {"phone": "123"})

        assert "phone" in exc_info.value.field_errors
        assert customers.get(customer.id) == customer

    def test_update_missing_raises_not_found(self, customers):
        with pytest.raises(NotFound):
            customers.update(42, {"name": "Nobody"})

    def test_delete(self, customers, customer):
        customers.delete(customer.id)
        assert customers.list() == []
        with pytest.raises(NotFound):
            customers.delete(customer.id)


class TestProductRepository:
    def test_defaults(self, product):
        assert product.type is ProductType.PRODUCT
        assert product.recurring is RecurringMode.NONE
        assert product.renewal_price is None
        assert product.price == Decimal("19.99")

    def test_float_price_is_stored_exactly(self, products):
        created = products.create({"name": "Gadget", "price": 0.1})
        assert created.price == Decimal("0.1")

    def test_recurring_product(self, subscription):
        assert subscription.type is ProductType.SERVICE
        assert subscription.recurring is RecurringMode.MONTHLY
        assert subscription.renewal_price == Decimal("25.00")

    def test_switching_to_recurring_without_renewal_price_fails(self, products, product):
        with pytest.raises(ValidationError) as exc_info:
            products.update(product.id, {"recurring": "Monthly"})

        assert "renewal_price" in exc_info.value.field_errors
        assert products.get(product.id).recurring is RecurringMode.NONE

    def test_switching_to_recurring_with_renewal_price(self, products, product):
        updated = products.update(product.id, {"recurring": "Annual", "renewal_price": "120"})
        assert updated.recurring is RecurringMode.ANNUAL
        assert updated.renewal_price == Decimal("120")

    def test_switching_back_to_one_off_clears_renewal_price(self, products, subscription):
        updated = products.update(subscription.id, {"recurring": RecurringMode.NONE})
        assert updated.renewal_price is None

    def test_negative_price_rejected(self, products):
        with pytest.raises(ValidationError) as exc_info:
            products.create({"name": "Refund", "price": "-1"})
        assert exc_info.value.field_errors == {"price": "Price must not be negative"}

    def test_non_numeric_price_rejected(self, products):
        with pytest.raises(ValidationError) as exc_info:
            products.create({"name": "Widget", "price": "cheap"})
        assert exc_info.value.field_errors == {"price": "Price must be a valid number"}


class TestSaleRepository:
    def _fields(self, customer, product, **overrides):
        fields = {
            "customer_id": customer.id,
            "product_id": product.id,
            "quantity": 2,
            "sale_date": utc_midnight(date(2025, 3, 5)),
            "total_amount": Decimal("39.98"),
        }
        fields.update(overrides)
        return fields

    def test_round_trip(self, sales, customer, product):
        sale = sales.create(self._fields(customer, product))

        assert sales.get(sale.id) == sale
        assert sale.sale_date == datetime(2025, 3, 5, tzinfo=timezone.utc)
        assert sale.currency == "GBP"

    def test_rejects_non_midnight_date(self, sales, customer, product):
        with pytest.raises(ValidationError) as exc_info:
            sales.create(self._fields(customer, product, sale_date=datetime(2025, 3, 5, 9, 30, tzinfo=timezone.utc)))
        assert "sale_date" in exc_info.value.field_errors

    def test_rejects_naive_date(self, sales, customer, product):
        with pytest.raises(ValidationError):
            sales.create(self._fields(customer, product, sale_date=datetime(2025, 3, 5)))

    def test_rejects_zero_quantity(self, sales, customer, product):
        with pytest.raises(ValidationError) as exc_info:
            sales.create(self._fields(customer, product, quantity=0))
        assert "quantity" in exc_info.value.field_errors
        assert sales.list() == []

    def test_list_by_customer_and_product(self, sales, customers, customer, product, subscription):
        other = customers.create({"name": "John", "email": "john@example.com"})
        first = sales.create(self._fields(customer, product))
        second = sales.create(self._fields(other, subscription, total_amount=Decimal("200.00")))

        assert sales.list_by_customer(customer.id) == [first]
        assert sales.list_by_product(subscription.id) == [second]
        assert sales.list_by_customer(999) == []
