"""Update Shipment Status Use Case: lifecycle moves and ship-time deductions."""

from dataclasses import dataclass, field

from cpg_inventory.application.dto.mappers import (
    shipment_to_response,
    transaction_to_response,
)
from cpg_inventory.application.dto.requests import UpdateShipmentStatusRequest
from cpg_inventory.application.dto.responses import UpdateShipmentStatusResponse
from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.inventory import (
    InventoryItem,
    Transaction,
    TransactionType,
    utcnow,
)
from cpg_inventory.core.entities.shipment import Shipment, ShipmentStatus
from cpg_inventory.core.exceptions import (
    InvalidStatusTransitionError,
    ShipmentNotFoundError,
)
from cpg_inventory.core.interfaces.inventory_store import IInventoryStore
from cpg_inventory.core.interfaces.shipment_store import IShipmentStore
from cpg_inventory.core.services.adjustment_dispatcher import plan_deductions

logger = get_logger(__name__)

SHIPMENT_REFERENCE = "shipment"


@dataclass
class UpdateShipmentStatusResult:
    """Result of a shipment status change."""

    shipment: Shipment
    transactions: list[Transaction] = field(default_factory=list)
    skipped_items: list[str] = field(default_factory=list)


class UpdateShipmentStatusUseCase:
    """
    Move a shipment to a new status.

    Going in transit stamps the ship date. A shipment whose stock was not
    committed when it was created deducts its matched lines at that point,
    in the same database transaction as the status change.
    """

    def __init__(
        self,
        shipment_store: IShipmentStore | None = None,
        inventory_store: IInventoryStore | None = None,
    ):
        self._shipment_store = shipment_store
        self._inventory_store = inventory_store

    async def _get_shipment_store(self) -> IShipmentStore:
        if self._shipment_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_shipment_store

            self._shipment_store = await get_shipment_store()
        return self._shipment_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _ship_transactions(
        self, shipment: Shipment
    ) -> tuple[list[Transaction], list[str]]:
        """Plan deductions for matched lines; unmatched lines are skipped."""
        inv_store = await self._get_inventory_store()
        resolved: dict[int, InventoryItem] = {}
        lines: list[tuple[InventoryItem, int]] = []
        skipped: list[str] = []

        for line in shipment.items:
            if line.inventory_item_id is not None:
                item = await inv_store.get_item(shipment.company_id, line.inventory_item_id)
            else:
                item = await inv_store.get_item_by_name(shipment.company_id, line.item_name)
            if item is None:
                logger.warning(
                    "shipment_item_unmatched",
                    shipment_id=shipment.id,
                    item_name=line.item_name,
                )
                skipped.append(line.item_name)
                continue
            item = resolved.setdefault(item.id, item)  # type: ignore[arg-type]
            lines.append((item, line.quantity))

        plans = plan_deductions(lines, action=TransactionType.SHIPMENT)
        transactions = [
            plan.to_transaction(
                SHIPMENT_REFERENCE,
                notes="Shipped for order",
                reference_id=shipment.id,
            )
            for plan in plans
        ]
        return transactions, skipped

    async def execute(
        self,
        company_id: int,
        shipment_id: int,
        request: UpdateShipmentStatusRequest,
    ) -> UpdateShipmentStatusResult:
        """Execute update shipment status use case."""
        shipment_store = await self._get_shipment_store()

        shipment = await shipment_store.get_shipment(company_id, shipment_id)
        if shipment is None:
            raise ShipmentNotFoundError(shipment_id)

        current = shipment.status
        was_committed = shipment.stock_committed
        logger.info(
            "shipment_status_change_started",
            shipment_id=shipment_id,
            current=current.value,
            requested=request.status.value,
        )

        if current == request.status:
            return UpdateShipmentStatusResult(shipment=shipment)
        if current.is_terminal:
            raise InvalidStatusTransitionError(
                "shipment", current.value, request.status.value
            )

        transactions: list[Transaction] = []
        skipped: list[str] = []
        if request.shipped_date is not None:
            shipment.shipped_date = request.shipped_date

        if request.status == ShipmentStatus.IN_TRANSIT:
            if shipment.shipped_date is None:
                shipment.shipped_date = utcnow()
            if not shipment.stock_committed:
                transactions, skipped = await self._ship_transactions(shipment)
                shipment.stock_committed = True

        shipment.status = request.status
        shipment = await shipment_store.update_status(
            shipment,
            transactions,
            expected_status=current,
            expected_committed=was_committed,
        )

        logger.info(
            "shipment_status_change_complete",
            shipment_id=shipment.id,
            status=shipment.status.value,
            deducted_lines=len(transactions),
            skipped_lines=len(skipped),
        )
        return UpdateShipmentStatusResult(
            shipment=shipment,
            transactions=transactions,
            skipped_items=skipped,
        )

    def to_response(
        self, result: UpdateShipmentStatusResult
    ) -> UpdateShipmentStatusResponse:
        """Convert result to API response."""
        return UpdateShipmentStatusResponse(
            shipment=shipment_to_response(result.shipment),
            transactions=[transaction_to_response(t) for t in result.transactions],
            skipped_items=result.skipped_items,
        )
