"""Create Shipment Use Case: manual shipments, optionally linked to an order."""

from cpg_inventory.application.dto.mappers import shipment_to_response
from cpg_inventory.application.dto.requests import CreateShipmentRequest
from cpg_inventory.application.dto.responses import ShipmentResponse
from cpg_inventory.config import get_logger, get_settings
from cpg_inventory.core.entities.inventory import utcnow
from cpg_inventory.core.entities.shipment import (
    Shipment,
    ShipmentLineItem,
    ShipmentStatus,
)
from cpg_inventory.core.exceptions import (
    InventoryItemNotFoundError,
    OrderNotFoundError,
    ValidationError,
)
from cpg_inventory.core.interfaces.inventory_store import IInventoryStore
from cpg_inventory.core.interfaces.order_store import IOrderStore
from cpg_inventory.core.interfaces.shipment_store import IShipmentStore
from cpg_inventory.core.services.numbering import generate_shipment_number

logger = get_logger(__name__)


class CreateShipmentUseCase:
    """
    Schedule a shipment.

    Lines naming an unknown item are kept by name and skipped when the
    shipment goes in transit. A linked shipment that copies the order's
    lines ships stock the order already deducted, so it is created as
    committed. Lines supplied explicitly are always deducted at ship time.
    """

    def __init__(
        self,
        shipment_store: IShipmentStore | None = None,
        order_store: IOrderStore | None = None,
        inventory_store: IInventoryStore | None = None,
    ):
        self._shipment_store = shipment_store
        self._order_store = order_store
        self._inventory_store = inventory_store

    async def _get_shipment_store(self) -> IShipmentStore:
        if self._shipment_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_shipment_store

            self._shipment_store = await get_shipment_store()
        return self._shipment_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(
        self, company_id: int, request: CreateShipmentRequest
    ) -> Shipment:
        """Execute create shipment use case."""
        shipment_store = await self._get_shipment_store()
        inv_store = await self._get_inventory_store()

        order = None
        if request.order_id is not None:
            order_store = await self._get_order_store()
            order = await order_store.get_order(company_id, request.order_id)
            if order is None:
                raise OrderNotFoundError(request.order_id)

        lines: list[ShipmentLineItem] = []
        for line in request.items:
            if line.inventory_item_id is not None:
                item = await inv_store.get_item(company_id, line.inventory_item_id)
                if item is None:
                    raise InventoryItemNotFoundError(line.inventory_item_id)
                lines.append(
                    ShipmentLineItem(
                        inventory_item_id=item.id,
                        item_name=item.name,
                        quantity=line.quantity,
                    )
                )
                continue
            item = await inv_store.get_item_by_name(company_id, line.item_name)  # type: ignore[arg-type]
            lines.append(
                ShipmentLineItem(
                    inventory_item_id=item.id if item else None,
                    item_name=item.name if item else line.item_name,  # type: ignore[arg-type]
                    quantity=line.quantity,
                )
            )

        copied_from_order = not lines and order is not None
        if copied_from_order:
            lines = [
                ShipmentLineItem(
                    inventory_item_id=oi.inventory_item_id,
                    item_name=oi.item_name,
                    quantity=oi.quantity,
                )
                for oi in order.items
            ]
        if not lines:
            raise ValidationError("items", "A shipment needs at least one item")

        recipient_name = request.recipient_name
        if not recipient_name and order is not None:
            recipient_name = order.recipient_name or order.customer_name
        if not recipient_name:
            raise ValidationError("recipient_name", "Recipient name is required")

        now = utcnow()
        shipment = Shipment(
            company_id=company_id,
            shipment_number=request.shipment_number
            or generate_shipment_number(get_settings().inventory.shipment_number_prefix, now),
            order_id=request.order_id,
            shipment_type=request.shipment_type,
            recipient_name=recipient_name,
            recipient_email=request.recipient_email
            or (order.recipient_email or order.customer_email if order else None),
            recipient_phone=request.recipient_phone
            or (order.recipient_phone if order else None),
            shipping_address=request.shipping_address
            or (order.shipping_address if order else None),
            scheduled_date=request.scheduled_date or now,
            tracking_number=request.tracking_number,
            carrier=request.carrier,
            status=ShipmentStatus.SCHEDULED,
            notes=request.notes,
            stock_committed=copied_from_order,
            items=lines,
        )
        shipment = await shipment_store.create_shipment(shipment)

        logger.info(
            "create_shipment_complete",
            shipment_id=shipment.id,
            order_id=shipment.order_id,
            stock_committed=shipment.stock_committed,
        )
        return shipment

    def to_response(self, shipment: Shipment) -> ShipmentResponse:
        return shipment_to_response(shipment)
