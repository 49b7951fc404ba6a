"""Create Order Use Case: records the order, deducts stock, schedules shipping."""

from dataclasses import dataclass, field

from cpg_inventory.application.dto.mappers import (
    order_to_response,
    shipment_to_response,
    transaction_to_response,
)
from cpg_inventory.application.dto.requests import CreateOrderRequest, OrderItemRequest
from cpg_inventory.application.dto.responses import CreateOrderResponse
from cpg_inventory.config import get_logger, get_settings
from cpg_inventory.core.entities.company import CustomFieldTable
from cpg_inventory.core.entities.inventory import InventoryItem, Transaction, TransactionType, utcnow
from cpg_inventory.core.entities.order import Order, OrderItem
from cpg_inventory.core.entities.shipment import (
    Shipment,
    ShipmentLineItem,
    ShipmentStatus,
    ShipmentType,
)
from cpg_inventory.core.exceptions import InventoryItemNotFoundError, ValidationError
from cpg_inventory.core.interfaces.company_store import ICompanyStore
from cpg_inventory.core.interfaces.inventory_store import IInventoryStore
from cpg_inventory.core.interfaces.order_store import IOrderStore
from cpg_inventory.core.services.adjustment_dispatcher import plan_deductions
from cpg_inventory.core.services.custom_fields import validate_custom_data
from cpg_inventory.core.services.numbering import (
    generate_order_number,
    generate_shipment_number,
)

logger = get_logger(__name__)

ORDER_REFERENCE = "order"


@dataclass
class CreateOrderResult:
    """Result of creating an order."""

    order: Order
    transactions: list[Transaction] = field(default_factory=list)
    shipment: Shipment | None = None


class CreateOrderUseCase:
    """
    Create an order as one unit of work.

    Every line is resolved to an inventory item and the combined demand is
    checked before anything is written. The store then inserts the order,
    decrements each item conditionally, logs an ``order`` transaction per
    line and, when shipping is needed, schedules a shipment whose stock is
    already committed.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        order_store: IOrderStore | None = None,
        company_store: ICompanyStore | None = None,
    ):
        self._inventory_store = inventory_store
        self._order_store = order_store
        self._company_store = company_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from cpg_inventory.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    async def _resolve(
        self, company_id: int, line: OrderItemRequest
    ) -> InventoryItem:
        inv_store = await self._get_inventory_store()
        item = None
        if line.inventory_item_id is not None:
            item = await inv_store.get_item(company_id, line.inventory_item_id)
        elif line.item_name:
            item = await inv_store.get_item_by_name(company_id, line.item_name)
        if item is None:
            raise InventoryItemNotFoundError(line.inventory_item_id or line.item_name)  # type: ignore[arg-type]
        return item

    async def execute(
        self, company_id: int, request: CreateOrderRequest
    ) -> CreateOrderResult:
        """Execute create order use case."""
        logger.info(
            "create_order_started",
            company_id=company_id,
            items=len(request.items),
            needs_shipping=request.needs_shipping,
        )

        if not request.customer_name.strip():
            raise ValidationError("customer_name", "Contact name is required")
        if not request.customer_email.strip():
            raise ValidationError("customer_email", "Contact email is required")
        if not request.items:
            raise ValidationError("items", "An order needs at least one item")

        company_store = await self._get_company_store()
        order_store = await self._get_order_store()

        definitions = await company_store.list_custom_fields(
            company_id, CustomFieldTable.ORDERS
        )
        custom_data = validate_custom_data(definitions, request.custom_data)

        # Resolve every line once; later lines reuse the same snapshot
        resolved: dict[int, InventoryItem] = {}
        lines: list[tuple[InventoryItem, OrderItemRequest]] = []
        for line in request.items:
            item = await self._resolve(company_id, line)
            item = resolved.setdefault(item.id, item)  # type: ignore[arg-type]
            lines.append((item, line))

        plans = plan_deductions(
            [(item, line.quantity) for item, line in lines],
            action=TransactionType.ORDER,
        )

        settings = get_settings().inventory
        now = utcnow()
        order_number = request.order_number or generate_order_number(
            settings.order_number_prefix, now
        )

        order = Order(
            company_id=company_id,
            order_number=order_number,
            customer_id=request.customer_id,
            customer_name=request.customer_name.strip(),
            customer_email=request.customer_email.strip(),
            customer_phone=request.customer_phone,
            recipient_name=request.recipient_name,
            recipient_email=request.recipient_email,
            recipient_phone=request.recipient_phone,
            shipping_address=request.shipping_address,
            needs_shipping=request.needs_shipping,
            custom_data=custom_data,
            items=[
                OrderItem(
                    inventory_item_id=item.id,
                    item_name=item.name,
                    quantity=line.quantity,
                    price=line.price if line.price is not None else item.price,
                )
                for item, line in lines
            ],
        )

        transactions = [
            plan.to_transaction(ORDER_REFERENCE, notes=f"Order {order_number}")
            for plan in plans
        ]

        shipment = None
        if request.needs_shipping:
            shipment = Shipment(
                company_id=company_id,
                shipment_number=generate_shipment_number(
                    settings.shipment_number_prefix, now
                ),
                shipment_type=ShipmentType.ORDER,
                recipient_name=request.recipient_name or order.customer_name,
                recipient_email=request.recipient_email or order.customer_email,
                recipient_phone=request.recipient_phone or order.customer_phone or None,
                shipping_address=request.shipping_address,
                scheduled_date=request.scheduled_date or now,
                carrier=request.carrier,
                status=ShipmentStatus.SCHEDULED,
                notes=f"Shipment for order {order_number}",
                stock_committed=True,
                items=[
                    ShipmentLineItem(
                        inventory_item_id=item.id,
                        item_name=item.name,
                        quantity=line.quantity,
                    )
                    for item, line in lines
                ],
            )

        order, shipment = await order_store.create_order(order, transactions, shipment)

        logger.info(
            "create_order_complete",
            order_id=order.id,
            order_number=order.order_number,
            total=str(order.total_amount),
            shipment_id=shipment.id if shipment else None,
        )
        return CreateOrderResult(
            order=order, transactions=transactions, shipment=shipment
        )

    def to_response(self, result: CreateOrderResult) -> CreateOrderResponse:
        """Convert result to API response."""
        return CreateOrderResponse(
            order=order_to_response(result.order),
            transactions=[transaction_to_response(t) for t in result.transactions],
            shipment=shipment_to_response(result.shipment) if result.shipment else None,
        )
