"""
Customer management endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from cpg_inventory.api.dependencies import get_company_id, get_cust_store, get_reports
from cpg_inventory.application.dto.mappers import customer_to_response, order_to_response
from cpg_inventory.application.dto.requests import CreateCustomerRequest, UpdateCustomerRequest
from cpg_inventory.application.dto.responses import (
    CustomerListResponse,
    CustomerOrderHistoryResponse,
    CustomerResponse,
    ErrorResponse,
)
from cpg_inventory.core.entities.customer import Customer
from cpg_inventory.core.services import ReportService
from cpg_inventory.infrastructure.storage.sqlite import SQLiteCustomerStore

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_customer(
    request: CreateCustomerRequest,
    company_id: int = Depends(get_company_id),
    store: SQLiteCustomerStore = Depends(get_cust_store),
) -> CustomerResponse:
    """Create a new customer."""
    customer = Customer(
        company_id=company_id,
        name=request.name.strip(),
        email=request.email,
        phone=request.phone,
        address=request.address,
    )
    created = await store.create_customer(customer)
    return customer_to_response(created)


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    limit: int = 100,
    offset: int = 0,
    company_id: int = Depends(get_company_id),
    store: SQLiteCustomerStore = Depends(get_cust_store),
) -> CustomerListResponse:
    """List customers by name."""
    customers = await store.list_customers(company_id, limit=limit, offset=offset)
    return CustomerListResponse(
        customers=[customer_to_response(c) for c in customers],
        total=len(customers),
    )


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_customer(
    customer_id: int,
    company_id: int = Depends(get_company_id),
    store: SQLiteCustomerStore = Depends(get_cust_store),
) -> CustomerResponse:
    customer = await store.get_customer(company_id, customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail=f"Customer {customer_id} not found")
    return customer_to_response(customer)


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_customer(
    customer_id: int,
    request: UpdateCustomerRequest,
    company_id: int = Depends(get_company_id),
    store: SQLiteCustomerStore = Depends(get_cust_store),
) -> CustomerResponse:
    """Update customer contact details. Omitted fields are kept."""
    customer = await store.get_customer(company_id, customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail=f"Customer {customer_id} not found")

    updates = request.model_dump(exclude_unset=True)
    if "name" in updates and updates["name"] is not None:
        updates["name"] = updates["name"].strip()
    updated = customer.model_copy(update=updates)

    saved = await store.update_customer(updated)
    return customer_to_response(saved)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_customer(
    customer_id: int,
    company_id: int = Depends(get_company_id),
    store: SQLiteCustomerStore = Depends(get_cust_store),
) -> None:
    """Delete a customer. Their orders keep the copied contact details."""
    deleted = await store.delete_customer(company_id, customer_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Customer {customer_id} not found")


@router.get(
    "/{customer_id}/orders",
    response_model=CustomerOrderHistoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def customer_orders(
    customer_id: int,
    company_id: int = Depends(get_company_id),
    reports: ReportService = Depends(get_reports),
) -> CustomerOrderHistoryResponse:
    """Order history for one customer, newest first."""
    history = await reports.customer_order_history(company_id, customer_id)
    return CustomerOrderHistoryResponse(
        customer=customer_to_response(history.customer),
        orders=[order_to_response(o) for o in history.orders],
        total_orders=len(history.orders),
        total_revenue=history.total_revenue,
    )
