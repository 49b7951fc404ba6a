"""Update Item Use Case: edit descriptive fields, never quantity."""

from cpg_inventory.application.dto.mappers import item_to_response
from cpg_inventory.application.dto.requests import UpdateItemRequest
from cpg_inventory.application.dto.responses import InventoryItemResponse
from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.company import CustomFieldTable
from cpg_inventory.core.entities.inventory import InventoryItem
from cpg_inventory.core.exceptions import DuplicateItemError, InventoryItemNotFoundError
from cpg_inventory.core.interfaces.company_store import ICompanyStore
from cpg_inventory.core.interfaces.inventory_store import IInventoryStore
from cpg_inventory.core.services.custom_fields import validate_custom_data

logger = get_logger(__name__)


class UpdateItemUseCase:
    """Update name, category, unit, reorder level, price or custom data."""

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
        self, company_id: int, item_id: int, request: UpdateItemRequest
    ) -> InventoryItem:
        inv_store = await self._get_inventory_store()

        item = await inv_store.get_item(company_id, item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)

        if request.name is not None and not item.matches_name(request.name):
            clash = await inv_store.get_item_by_name(company_id, request.name)
            if clash is not None and clash.id != item.id:
                raise DuplicateItemError(request.name.strip(), clash.id)
            item.name = request.name.strip()

        if request.category is not None:
            item.category = request.category
        if request.unit is not None:
            item.unit = request.unit
        if request.reorder_level is not None:
            item.reorder_level = request.reorder_level
        if request.price is not None:
            item.price = request.price
        if request.custom_data is not None:
            company_store = await self._get_company_store()
            definitions = await company_store.list_custom_fields(
                company_id, CustomFieldTable.INVENTORY_ITEMS
            )
            item.custom_data = validate_custom_data(definitions, request.custom_data)

        item = await inv_store.update_item(item)
        logger.info("item_details_updated", item_id=item.id)
        return item

    def to_response(self, item: InventoryItem) -> InventoryItemResponse:
        return item_to_response(item)
