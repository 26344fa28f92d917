"""
Dashboard API Endpoint.
"""

from fastapi import APIRouter, Depends

from api.dependencies import (
    get_customer_repository,
    get_product_repository,
    get_sale_repository,
)
from api.models import CustomerResponse, DashboardResponse, TopProductResponse
from domain.formatting import format_currency
from repositories.customer_repository import CustomerRepository
from repositories.product_repository import ProductRepository
from repositories.sale_repository import SaleRepository
from services.dashboard_service import build_dashboard_summary

router = APIRouter()


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Dashboard Summary",
    description="Counts, total revenue, the five newest customers and the top products by revenue."
)
def get_dashboard(
    customers: CustomerRepository = Depends(get_customer_repository),
    products: ProductRepository = Depends(get_product_repository),
    sales: SaleRepository = Depends(get_sale_repository),
):
    summary = build_dashboard_summary(customers, products, sales)
    return DashboardResponse(
        total_customers=summary.total_customers,
        total_products=summary.total_products,
        total_sales=summary.total_sales,
        total_revenue=summary.total_revenue,
        revenue_display=format_currency(summary.total_revenue),
        top_products=[
            TopProductResponse(
                product_id=entry.product.id,
                name=entry.product.name,
                total_quantity=entry.total_quantity,
                total_revenue=entry.total_revenue,
                revenue_display=format_currency(entry.total_revenue),
            )
            for entry in summary.top_products
        ],
        recent_customers=[CustomerResponse.from_domain(c) for c in summary.recent_customers],
    )
