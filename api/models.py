"""
API Request and Response Models.

Pydantic models for parsing API requests and serializing responses.
Decimals serialize as strings and dates as ISO-8601. Field formats (UK
phone/postcode, prices, quantities) are checked by the domain layer so the
client gets per-field messages.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.customer import Customer
from domain.formatting import format_currency, format_uk_date
from domain.product import Product, ProductType, RecurringMode
from domain.sale import Sale


# ============================================================================
# Customer Models
# ============================================================================

class CustomerCreateRequest(BaseModel):
    """Request to create a customer."""
    name: str
    email: str
    phone: str = ""
    address: str = ""
    postcode: str = ""

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Jane Smith",
                "email": "jane@example.co.uk",
                "phone": "07700 900000",
                "address": "10 Downing Street, London",
                "postcode": "SW1A 2AA"
            }
        }


class CustomerUpdateRequest(BaseModel):
    """Partial customer update; omitted fields are left unchanged."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    postcode: Optional[str] = None


class CustomerResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    address: str
    postcode: str
    created_at: datetime

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerResponse":
        return cls(
            id=customer.id,
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            address=customer.address,
            postcode=customer.postcode,
            created_at=customer.created_at,
        )


# ============================================================================
# Product Models
# ============================================================================

class ProductCreateRequest(BaseModel):
    """Request to create a product or service."""
    name: str
    description: str = ""
    price: Optional[Decimal] = None
    type: ProductType = ProductType.PRODUCT
    recurring: RecurringMode = RecurringMode.NONE
    renewal_price: Optional[Decimal] = Field(
        default=None,
        description="Required when recurring is Monthly or Annual"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Website hosting",
                "description": "Managed hosting, 10GB",
                "price": "49.99",
                "type": "Service",
                "recurring": "Monthly",
                "renewal_price": "19.99"
            }
        }


class ProductUpdateRequest(BaseModel):
    """Partial product update; omitted fields are left unchanged."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    type: Optional[ProductType] = None
    recurring: Optional[RecurringMode] = None
    renewal_price: Optional[Decimal] = None


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    type: ProductType
    recurring: RecurringMode
    renewal_price: Optional[Decimal] = None
    price_display: str

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            type=product.type,
            recurring=product.recurring,
            renewal_price=product.renewal_price,
            price_display=format_currency(product.price),
        )


class RenewalResponse(BaseModel):
    """Renewal charge for a product; null amount for one-off items."""
    product_id: int
    recurring: RecurringMode
    renewal_amount: Optional[Decimal] = None
    renewal_display: Optional[str] = None


# ============================================================================
# Sale Models
# ============================================================================

class SaleCreateRequest(BaseModel):
    """
    Request to record a sale.

    total_amount is accepted for compatibility with clients that pre-compute
    it, but the server always recalculates it from the product price.
    """
    customer_id: int
    product_id: int
    quantity: int = 1
    sale_date: str = Field(..., description="YYYY-MM-DD (or DD-MM-YYYY)")
    total_amount: Optional[Decimal] = Field(default=None, description="Ignored; recomputed by the server")

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "product_id": 2,
                "quantity": 3,
                "sale_date": "2025-03-05"
            }
        }


class SaleUpdateRequest(BaseModel):
    """Partial sale update; the total is always recomputed."""
    customer_id: Optional[int] = None
    product_id: Optional[int] = None
    quantity: Optional[int] = None
    sale_date: Optional[str] = None
    total_amount: Optional[Decimal] = None


class SaleResponse(BaseModel):
    id: int
    customer_id: int
    product_id: int
    quantity: int
    sale_date: date
    total_amount: Decimal
    currency: str
    sale_date_display: str
    total_display: str

    @classmethod
    def from_domain(cls, sale: Sale) -> "SaleResponse":
        return cls(
            id=sale.id,
            customer_id=sale.customer_id,
            product_id=sale.product_id,
            quantity=sale.quantity,
            sale_date=sale.sale_day,
            total_amount=sale.total_amount,
            currency=sale.currency,
            sale_date_display=format_uk_date(sale.sale_date),
            total_display=format_currency(sale.total_amount),
        )


# ============================================================================
# Dashboard Models
# ============================================================================

class TopProductResponse(BaseModel):
    product_id: int
    name: str
    total_quantity: int
    total_revenue: Decimal
    revenue_display: str


class DashboardResponse(BaseModel):
    total_customers: int
    total_products: int
    total_sales: int
    total_revenue: Decimal
    revenue_display: str
    top_products: List[TopProductResponse]
    recent_customers: List[CustomerResponse]


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int
    field_errors: Optional[Dict[str, str]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Validation failed",
                "detail": "Validation failed (quantity: Quantity must be at least 1)",
                "status_code": 400,
                "field_errors": {"quantity": "Quantity must be at least 1"}
            }
        }
