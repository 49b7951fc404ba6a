"""Adjust Stock Use Case: item creation and manual stock adjustments."""

from dataclasses import dataclass

from cpg_inventory.application.dto.mappers import item_to_response, transaction_to_response
from cpg_inventory.application.dto.requests import AdjustStockRequest
from cpg_inventory.application.dto.responses import AdjustStockResponse
from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.company import CustomFieldTable
from cpg_inventory.core.entities.inventory import (
    InventoryItem,
    Transaction,
    TransactionType,
)
from cpg_inventory.core.exceptions import (
    DuplicateItemError,
    InventoryItemNotFoundError,
    ValidationError,
)
from cpg_inventory.core.interfaces.company_store import ICompanyStore
from cpg_inventory.core.interfaces.inventory_store import IInventoryStore
from cpg_inventory.core.services.adjustment_dispatcher import (
    MANUAL_ACTIONS,
    plan_adjustment,
)
from cpg_inventory.core.services.custom_fields import validate_custom_data

logger = get_logger(__name__)

ITEM_CREATION_REFERENCE = "item_creation"
MANUAL_ADJUSTMENT_REFERENCE = "manual_adjustment"


@dataclass
class AdjustStockResult:
    """Result of creating or adjusting an item."""

    item: InventoryItem
    transaction: Transaction
    previous_quantity: int
    created: bool = False


class AdjustStockUseCase:
    """Create items (add_new) or apply a manual stock adjustment."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        company_store: ICompanyStore | None = None,
    ):
        self._inventory_store = inventory_store
        self._company_store = company_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    async def execute(
        self, company_id: int, request: AdjustStockRequest
    ) -> AdjustStockResult:
        """Execute the adjustment for one company."""
        logger.info(
            "adjust_stock_started",
            company_id=company_id,
            action=request.action.value,
            item_id=request.item_id,
            name=request.name,
            quantity=request.quantity,
        )

        if request.action == TransactionType.ADD_NEW:
            return await self._add_new(company_id, request)
        return await self._adjust(company_id, request)

    async def _add_new(
        self, company_id: int, request: AdjustStockRequest
    ) -> AdjustStockResult:
        if not request.name or not request.name.strip():
            raise ValidationError("name", "Item name is required for add_new")
        for field in ("category", "unit", "reorder_level", "price"):
            if getattr(request, field) is None:
                raise ValidationError(field, "Required when adding a new item")

        inv_store = await self._get_inventory_store()
        company_store = await self._get_company_store()

        name = request.name.strip()
        existing = await inv_store.get_item_by_name(company_id, name)
        if existing is not None:
            raise DuplicateItemError(name, existing.id)

        definitions = await company_store.list_custom_fields(
            company_id, CustomFieldTable.INVENTORY_ITEMS
        )
        custom_data = validate_custom_data(definitions, request.custom_data)

        item = InventoryItem(
            company_id=company_id,
            name=name,
            category=request.category,  # type: ignore[arg-type]
            quantity=request.quantity,
            unit=request.unit,  # type: ignore[arg-type]
            reorder_level=request.reorder_level,  # type: ignore[arg-type]
            price=request.price,  # type: ignore[arg-type]
            custom_data=custom_data,
        )
        transaction = Transaction(
            company_id=company_id,
            transaction_type=TransactionType.ADD_NEW,
            quantity=request.quantity,
            reference_type=ITEM_CREATION_REFERENCE,
            notes=request.notes or "New item created",
        )
        item, transaction = await inv_store.create_item(item, transaction)

        logger.info(
            "adjust_stock_item_created",
            item_id=item.id,
            name=item.name,
            quantity=item.quantity,
        )
        return AdjustStockResult(
            item=item,
            transaction=transaction,
            previous_quantity=0,
            created=True,
        )

    async def _adjust(
        self, company_id: int, request: AdjustStockRequest
    ) -> AdjustStockResult:
        if request.action not in MANUAL_ACTIONS:
            raise ValidationError(
                "action",
                "Not a manual stock adjustment",
                request.action.value,
            )

        inv_store = await self._get_inventory_store()

        if request.item_id is not None:
            item = await inv_store.get_item(company_id, request.item_id)
        else:
            item = await inv_store.get_item_by_name(company_id, request.name)  # type: ignore[arg-type]
        if item is None:
            raise InventoryItemNotFoundError(request.item_id or request.name)  # type: ignore[arg-type]

        # Early rejection on the read snapshot; the store re-checks atomically
        plan = plan_adjustment(item, request.action, request.quantity)
        if plan.is_noop:
            logger.info("adjust_stock_noop", item_id=item.id, action=request.action.value)

        transaction = plan.to_transaction(
            MANUAL_ADJUSTMENT_REFERENCE,
            notes=request.notes or "Manual stock adjustment",
        )
        updated = await inv_store.apply_adjustment(transaction)

        logger.info(
            "adjust_stock_complete",
            item_id=updated.id,
            delta=transaction.quantity,
            quantity=updated.quantity,
        )
        return AdjustStockResult(
            item=updated,
            transaction=transaction,
            previous_quantity=updated.quantity - transaction.quantity,
        )

    def to_response(self, result: AdjustStockResult) -> AdjustStockResponse:
        """Convert result to API response."""
        return AdjustStockResponse(
            item=item_to_response(result.item),
            transaction=transaction_to_response(result.transaction),
            previous_quantity=result.previous_quantity,
            created=result.created,
        )
