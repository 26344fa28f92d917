"""
Products API Endpoints.

CRUD for the product/service catalog plus renewal pricing.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_product_service
from api.models import (
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
    RenewalResponse,
)
from domain.formatting import format_currency
from services.product_service import ProductService

router = APIRouter()


@router.get("/products", response_model=List[ProductResponse], summary="List Products")
def list_products(service: ProductService = Depends(get_product_service)):
    return [ProductResponse.from_domain(p) for p in service.list_products()]


@router.get("/products/{product_id}", response_model=ProductResponse, summary="Get Product")
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return ProductResponse.from_domain(service.get_product(product_id))


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Product",
    description="Create a product or service. Recurring items need a renewal price."
)
def create_product(request: ProductCreateRequest, service: ProductService = Depends(get_product_service)):
    """
    Create a catalog entry.

    **Validation:**
    - `price` is required, non-negative, at most 2 decimal places
    - `renewal_price` is required when `recurring` is `Monthly` or `Annual`
      and is dropped when `recurring` is `None`
    """
    return ProductResponse.from_domain(service.create_product(request.model_dump()))


@router.put("/products/{product_id}", response_model=ProductResponse, summary="Update Product")
def update_product(
    product_id: int,
    request: ProductUpdateRequest,
    service: ProductService = Depends(get_product_service),
):
    fields = request.model_dump(exclude_unset=True)
    return ProductResponse.from_domain(service.update_product(product_id, fields))


@router.get(
    "/products/{product_id}/renewal",
    response_model=RenewalResponse,
    summary="Get Renewal Price",
    description="Amount charged on each renewal of a recurring product; null for one-off items."
)
def get_renewal(product_id: int, service: ProductService = Depends(get_product_service)):
    product = service.get_product(product_id)
    amount = service.renewal_amount(product_id)
    return RenewalResponse(
        product_id=product.id,
        recurring=product.recurring,
        renewal_amount=amount,
        renewal_display=format_currency(amount) if amount is not None else None,
    )


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Product",
    description="Delete a product. Refused with 409 once the product has been sold."
)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
