"""
FastAPI dependency providers.

Routers never build repositories themselves; they ask for services here.
Tests swap the store with `app.dependency_overrides[get_store]`.
"""

from __future__ import annotations

from fastapi import Depends

from repositories.base_repository import RowStore
from repositories.client import get_row_store
from repositories.customer_repository import CustomerRepository
from repositories.product_repository import ProductRepository
from repositories.sale_repository import SaleRepository
from services.customer_service import CustomerService
from services.product_service import ProductService
from services.sale_service import SaleService


def get_store() -> RowStore:
    return get_row_store()


def get_customer_repository(store: RowStore = Depends(get_store)) -> CustomerRepository:
    return CustomerRepository(store)


def get_product_repository(store: RowStore = Depends(get_store)) -> ProductRepository:
    return ProductRepository(store)


def get_sale_repository(store: RowStore = Depends(get_store)) -> SaleRepository:
    return SaleRepository(store)


def get_customer_service(
    customers: CustomerRepository = Depends(get_customer_repository),
    sales: SaleRepository = Depends(get_sale_repository),
) -> CustomerService:
    return CustomerService(customers, sales)


def get_product_service(
    products: ProductRepository = Depends(get_product_repository),
    sales: SaleRepository = Depends(get_sale_repository),
) -> ProductService:
    return ProductService(products, sales)


def get_sale_service(
    customers: CustomerRepository = Depends(get_customer_repository),
    products: ProductRepository = Depends(get_product_repository),
    sales: SaleRepository = Depends(get_sale_repository),
) -> SaleService:
    return SaleService(customers, products, sales)
