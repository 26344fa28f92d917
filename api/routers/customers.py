"""
Customers API Endpoints.

CRUD for customer records.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_customer_service
from api.models import CustomerCreateRequest, CustomerResponse, CustomerUpdateRequest
from services.customer_service import CustomerService

router = APIRouter()


@router.get("/customers", response_model=List[CustomerResponse], summary="List Customers")
def list_customers(service: CustomerService = Depends(get_customer_service)):
    return [CustomerResponse.from_domain(c) for c in service.list_customers()]


@router.get("/customers/{customer_id}", response_model=CustomerResponse, summary="Get Customer")
def get_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    return CustomerResponse.from_domain(service.get_customer(customer_id))


@router.post(
    "/customers",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Customer",
    description="Create a customer. Email is required; phone and postcode must be UK formats when given."
)
def create_customer(request: CustomerCreateRequest, service: CustomerService = Depends(get_customer_service)):
    """
    Create a customer record.

    **Validation:**
    - `name` and `email` are required
    - `phone` must be `0` or `+44` followed by 10 digits (spaces ignored)
    - `postcode` must be a UK postcode, e.g. `SW1A 1AA`
    """
    return CustomerResponse.from_domain(service.create_customer(request.model_dump()))


@router.put("/customers/{customer_id}", response_model=CustomerResponse, summary="Update Customer")
def update_customer(
    customer_id: int,
    request: CustomerUpdateRequest,
    service: CustomerService = Depends(get_customer_service),
):
    fields = request.model_dump(exclude_unset=True)
    return CustomerResponse.from_domain(service.update_customer(customer_id, fields))


@router.delete(
    "/customers/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Customer",
    description="Delete a customer. Refused with 409 while any sale references the customer."
)
def delete_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    service.delete_customer(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
