"""Shipment endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from cpg_inventory.api.dependencies import (
    get_company_id,
    get_create_shipment_use_case,
    get_ship_store,
    get_update_shipment_status_use_case,
)
from cpg_inventory.application.dto.mappers import shipment_to_response
from cpg_inventory.application.dto.requests import (
    CreateShipmentRequest,
    UpdateShipmentStatusRequest,
)
from cpg_inventory.application.dto.responses import (
    ErrorResponse,
    ShipmentListResponse,
    ShipmentResponse,
    UpdateShipmentStatusResponse,
)
from cpg_inventory.application.use_cases.create_shipment import CreateShipmentUseCase
from cpg_inventory.application.use_cases.update_shipment_status import (
    UpdateShipmentStatusUseCase,
)
from cpg_inventory.core.entities.shipment import ShipmentStatus
from cpg_inventory.infrastructure.storage.sqlite import SQLiteShipmentStore

router = APIRouter(prefix="/api/shipments", tags=["shipments"])


@router.post(
    "",
    response_model=ShipmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_shipment(
    request: CreateShipmentRequest,
    company_id: int = Depends(get_company_id),
    use_case: CreateShipmentUseCase = Depends(get_create_shipment_use_case),
) -> ShipmentResponse:
    """Schedule a manual shipment, optionally linked to an order."""
    shipment = await use_case.execute(company_id, request)
    return use_case.to_response(shipment)


@router.get("", response_model=ShipmentListResponse)
async def list_shipments(
    status: ShipmentStatus | None = None,
    limit: int = 100,
    offset: int = 0,
    company_id: int = Depends(get_company_id),
    store: SQLiteShipmentStore = Depends(get_ship_store),
) -> ShipmentListResponse:
    shipments = await store.list_shipments(
        company_id, status=status, limit=limit, offset=offset
    )
    return ShipmentListResponse(
        shipments=[shipment_to_response(s) for s in shipments],
        total=len(shipments),
    )


@router.get(
    "/{shipment_id}",
    response_model=ShipmentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_shipment(
    shipment_id: int,
    company_id: int = Depends(get_company_id),
    store: SQLiteShipmentStore = Depends(get_ship_store),
) -> ShipmentResponse:
    shipment = await store.get_shipment(company_id, shipment_id)
    if shipment is None:
        raise HTTPException(status_code=404, detail=f"Shipment {shipment_id} not found")
    return shipment_to_response(shipment)


@router.patch(
    "/{shipment_id}/status",
    response_model=UpdateShipmentStatusResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_shipment_status(
    shipment_id: int,
    request: UpdateShipmentStatusRequest,
    company_id: int = Depends(get_company_id),
    use_case: UpdateShipmentStatusUseCase = Depends(get_update_shipment_status_use_case),
) -> UpdateShipmentStatusResponse:
    """
    Move a shipment through its lifecycle.

    Going in transit deducts stock for shipments whose stock was not
    already taken by an order.
    """
    result = await use_case.execute(company_id, shipment_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{shipment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_shipment(
    shipment_id: int,
    company_id: int = Depends(get_company_id),
    store: SQLiteShipmentStore = Depends(get_ship_store),
) -> None:
    deleted = await store.delete_shipment(company_id, shipment_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Shipment {shipment_id} not found")
