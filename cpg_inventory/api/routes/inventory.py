"""Inventory management endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from cpg_inventory.api.dependencies import (
    get_adjust_stock_use_case,
    get_company_id,
    get_inv_item_store,
    get_reports,
    get_update_item_use_case,
)
from cpg_inventory.application.dto.mappers import (
    item_to_response,
    ledger_entry_to_response,
    physical_stock_to_response,
)
from cpg_inventory.application.dto.requests import AdjustStockRequest, UpdateItemRequest
from cpg_inventory.application.dto.responses import (
    AdjustStockResponse,
    ErrorResponse,
    InventoryItemResponse,
    InventoryListResponse,
    ItemHistoryResponse,
    PhysicalStockResponse,
)
from cpg_inventory.application.use_cases.adjust_stock import AdjustStockUseCase
from cpg_inventory.application.use_cases.update_item import UpdateItemUseCase
from cpg_inventory.config import get_settings
from cpg_inventory.core.entities.inventory import ItemCategory
from cpg_inventory.core.services import ReportService
from cpg_inventory.infrastructure.storage.sqlite import SQLiteInventoryStore

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


def _page_size(limit: int | None) -> int:
    settings = get_settings().inventory
    if limit is None:
        return settings.default_page_size
    return max(1, min(limit, settings.max_page_size))


@router.get("", response_model=InventoryListResponse)
async def list_items(
    category: ItemCategory | None = None,
    low_stock: bool = False,
    search: str | None = None,
    limit: int | None = None,
    offset: int = 0,
    company_id: int = Depends(get_company_id),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> InventoryListResponse:
    """List inventory items, newest first."""
    items = await store.list_items(
        company_id,
        category=category,
        low_stock_only=low_stock,
        search=search,
        limit=_page_size(limit),
        offset=offset,
    )
    return InventoryListResponse(
        items=[item_to_response(item) for item in items],
        total=len(items),
    )


@router.post(
    "/adjustments",
    response_model=AdjustStockResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def adjust_stock(
    request: AdjustStockRequest,
    company_id: int = Depends(get_company_id),
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> AdjustStockResponse:
    """Create an item (add_new) or apply a stock adjustment."""
    result = await use_case.execute(company_id, request)
    return use_case.to_response(result)


@router.get(
    "/physical",
    response_model=list[PhysicalStockResponse],
)
async def physical_stock(
    company_id: int = Depends(get_company_id),
    reports: ReportService = Depends(get_reports),
) -> list[PhysicalStockResponse]:
    """Stored quantities plus stock committed to scheduled shipments."""
    stock = await reports.physical_stock(company_id)
    return [physical_stock_to_response(s) for s in stock]


@router.get(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: int,
    company_id: int = Depends(get_company_id),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> InventoryItemResponse:
    """Get one inventory item."""
    item = await store.get_item(company_id, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Inventory item {item_id} not found")
    return item_to_response(item)


@router.patch(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_item(
    item_id: int,
    request: UpdateItemRequest,
    company_id: int = Depends(get_company_id),
    use_case: UpdateItemUseCase = Depends(get_update_item_use_case),
) -> InventoryItemResponse:
    """Edit an item's details. Quantity changes go through adjustments."""
    item = await use_case.execute(company_id, item_id, request)
    return use_case.to_response(item)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: int,
    company_id: int = Depends(get_company_id),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> None:
    """Delete an item with no ledger history."""
    deleted = await store.delete_item(company_id, item_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Inventory item {item_id} not found")


@router.get(
    "/{item_id}/history",
    response_model=ItemHistoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def item_history(
    item_id: int,
    company_id: int = Depends(get_company_id),
    reports: ReportService = Depends(get_reports),
) -> ItemHistoryResponse:
    """Item ledger, newest first, with running stock per entry."""
    history = await reports.item_history(company_id, item_id)
    return ItemHistoryResponse(
        item=item_to_response(history.item),
        entries=[ledger_entry_to_response(e) for e in history.entries],
        ledger_quantity=history.consistency.ledger_quantity,
        drift=history.consistency.drift,
        is_consistent=history.consistency.is_consistent,
    )
