"""
Sales API Endpoints.

Record, amend and remove sales. Totals are always computed server-side.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_sale_service
from api.models import SaleCreateRequest, SaleResponse, SaleUpdateRequest
from services.sale_service import SaleService

router = APIRouter()


@router.get("/sales", response_model=List[SaleResponse], summary="List Sales")
def list_sales(service: SaleService = Depends(get_sale_service)):
    return [SaleResponse.from_domain(s) for s in service.list_sales()]


@router.get("/sales/{sale_id}", response_model=SaleResponse, summary="Get Sale")
def get_sale(sale_id: int, service: SaleService = Depends(get_sale_service)):
    return SaleResponse.from_domain(service.get_sale(sale_id))


@router.post(
    "/sales",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record Sale",
    description="Record a sale. The total is product price x quantity, computed by the server."
)
def create_sale(request: SaleCreateRequest, service: SaleService = Depends(get_sale_service)):
    """
    Record a sale of a product to a customer.

    **Process:**
    1. Resolves the customer and product (400 if either is unknown)
    2. Validates quantity (at least 1) and sale date
    3. Computes `total_amount` from the product's current price

    Any `total_amount` in the request is ignored.

    **Example request:**
    ```json
    {
      "customer_id": 1,
      "product_id": 2,
      "quantity": 3,
      "sale_date": "2025-03-05"
    }
    ```
    """
    sale = service.create_sale(
        customer_id=request.customer_id,
        product_id=request.product_id,
        quantity=request.quantity,
        sale_date=request.sale_date,
        total_amount=request.total_amount,
    )
    return SaleResponse.from_domain(sale)


@router.put("/sales/{sale_id}", response_model=SaleResponse, summary="Update Sale")
def update_sale(sale_id: int, request: SaleUpdateRequest, service: SaleService = Depends(get_sale_service)):
    """
    Amend a sale. Omitted fields keep their stored values; the customer and
    product are re-checked and the total recomputed.
    """
    sale = service.update_sale(
        sale_id,
        customer_id=request.customer_id,
        product_id=request.product_id,
        quantity=request.quantity,
        sale_date=request.sale_date,
        total_amount=request.total_amount,
    )
    return SaleResponse.from_domain(sale)


@router.delete("/sales/{sale_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Sale")
def delete_sale(sale_id: int, service: SaleService = Depends(get_sale_service)):
    service.delete_sale(sale_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
