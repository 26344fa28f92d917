"""
Customer service.

CRUD for customers with a restrict-delete policy: a customer that still has
sales cannot be deleted.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from domain.customer import Customer
from domain.errors import ReferenceInUse
from repositories.customer_repository import CustomerRepository
from repositories.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, customers: CustomerRepository, sales: SaleRepository):
        self.customers = customers
        self.sales = sales

    def list_customers(self) -> List[Customer]:
        return self.customers.list()

    def get_customer(self, customer_id: int) -> Customer:
        return self.customers.get(customer_id)

    def create_customer(self, fields: Mapping[str, Any]) -> Customer:
        return self.customers.create(fields)

    def update_customer(self, customer_id: int, fields: Mapping[str, Any]) -> Customer:
        return self.customers.update(customer_id, fields)

    def delete_customer(self, customer_id: int) -> None:
        """
        Delete a customer that has no sales.

        Raises:
            NotFound: If the customer does not exist
            ReferenceInUse: If any sale references the customer
        """
        customer = self.customers.get(customer_id)
        referencing = self.sales.list_by_customer(customer.id)
        if referencing:
            logger.warning(
                "Refusing to delete customer with sales",
                extra={"customer_id": customer.id, "sale_count": len(referencing)},
            )
            raise ReferenceInUse("Customer", customer.id, len(referencing))
        self.customers.delete(customer.id)


__all__ = ["CustomerService"]
