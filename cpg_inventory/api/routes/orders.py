"""
Order management endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from cpg_inventory.api.dependencies import (
    get_company_id,
    get_create_order_use_case,
    get_ord_store,
    get_ship_store,
)
from cpg_inventory.application.dto.mappers import order_to_response, shipment_to_response
from cpg_inventory.application.dto.requests import CreateOrderRequest, UpdateOrderStatusRequest
from cpg_inventory.application.dto.responses import (
    CreateOrderResponse,
    ErrorResponse,
    OrderListResponse,
    OrderResponse,
    ShipmentListResponse,
)
from cpg_inventory.application.use_cases.create_order import CreateOrderUseCase
from cpg_inventory.core.entities.order import OrderStatus
from cpg_inventory.infrastructure.storage.sqlite import SQLiteOrderStore, SQLiteShipmentStore

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post(
    "",
    response_model=CreateOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def create_order(
    request: CreateOrderRequest,
    company_id: int = Depends(get_company_id),
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
) -> CreateOrderResponse:
    """
    Create an order.

    Stock for every line is deducted in the same unit of work. When the
    order needs shipping a scheduled shipment is created with it.
    """
    result = await use_case.execute(company_id, request)
    return use_case.to_response(result)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status: OrderStatus | None = None,
    customer_id: int | None = None,
    limit: int = 100,
    offset: int = 0,
    company_id: int = Depends(get_company_id),
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderListResponse:
    """List orders, newest first."""
    orders = await store.list_orders(
        company_id,
        status=status,
        customer_id=customer_id,
        limit=limit,
        offset=offset,
    )
    return OrderListResponse(
        orders=[order_to_response(o) for o in orders],
        total=len(orders),
    )


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: int,
    company_id: int = Depends(get_company_id),
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderResponse:
    """Get an order with its items."""
    order = await store.get_order(company_id, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return order_to_response(order)


@router.patch(
    "/{order_id}/status",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_order_status(
    order_id: int,
    request: UpdateOrderStatusRequest,
    company_id: int = Depends(get_company_id),
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderResponse:
    """Change order status. Cancelling does not restore stock."""
    order = await store.update_status(company_id, order_id, request.status)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return order_to_response(order)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_order(
    order_id: int,
    company_id: int = Depends(get_company_id),
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> None:
    """Delete an order that has no shipments."""
    deleted = await store.delete_order(company_id, order_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")


@router.get(
    "/{order_id}/shipments",
    response_model=ShipmentListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_order_shipments(
    order_id: int,
    company_id: int = Depends(get_company_id),
    orders: SQLiteOrderStore = Depends(get_ord_store),
    shipments: SQLiteShipmentStore = Depends(get_ship_store),
) -> ShipmentListResponse:
    """Shipments linked to an order."""
    order = await orders.get_order(company_id, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    linked = await shipments.list_for_order(company_id, order_id)
    return ShipmentListResponse(
        shipments=[shipment_to_response(s) for s in linked],
        total=len(linked),
    )
