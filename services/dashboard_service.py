"""
Dashboard summary.

Headline counts, total revenue, the most recently added customers and the
best-selling catalog entries by revenue.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from domain.customer import Customer
from domain.product import Product
from repositories.customer_repository import CustomerRepository
from repositories.product_repository import ProductRepository
from repositories.sale_repository import SaleRepository

TOP_PRODUCT_LIMIT = 5
RECENT_CUSTOMER_LIMIT = 5


@dataclass(frozen=True, slots=True)
class ProductPerformance:
    product: Product
    total_quantity: int
    total_revenue: Decimal


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    total_customers: int
    total_products: int
    total_sales: int
    total_revenue: Decimal
    top_products: List[ProductPerformance]
    recent_customers: List[Customer]


def build_dashboard_summary(
    customers: CustomerRepository,
    products: ProductRepository,
    sales: SaleRepository,
    top_limit: int = TOP_PRODUCT_LIMIT,
    recent_limit: int = RECENT_CUSTOMER_LIMIT,
) -> DashboardSummary:
    """
    Summarize the whole store.

    Revenue is the sum of stored sale totals. Products are ranked by revenue
    (highest first, ties broken by name); unsold products rank with zero.
    Recent customers are newest first by creation time, later ids winning
    ties.
    """
    all_customers = customers.list()
    all_products = products.list()
    all_sales = sales.list()

    quantity_by_product: Dict[int, int] = defaultdict(int)
    revenue_by_product: Dict[int, Decimal] = defaultdict(lambda: Decimal("0"))
    for sale in all_sales:
        quantity_by_product[sale.product_id] += sale.quantity
        revenue_by_product[sale.product_id] += sale.total_amount

    performance = [
        ProductPerformance(
            product=product,
            total_quantity=quantity_by_product[product.id],
            total_revenue=revenue_by_product[product.id],
        )
        for product in all_products
    ]
    performance.sort(key=lambda p: (-p.total_revenue, p.product.name))
    recent = sorted(all_customers, key=lambda c: (c.created_at, c.id), reverse=True)

    return DashboardSummary(
        total_customers=len(all_customers),
        total_products=len(all_products),
        total_sales=len(all_sales),
        total_revenue=sum((sale.total_amount for sale in all_sales), Decimal("0")),
        top_products=performance[:top_limit],
        recent_customers=recent[:recent_limit],
    )


__all__ = [
    "TOP_PRODUCT_LIMIT",
    "RECENT_CUSTOMER_LIMIT",
    "ProductPerformance",
    "DashboardSummary",
    "build_dashboard_summary",
]
