"""
Report and dashboard statistics service.

Summaries are plain reductions over rows already fetched from the stores.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.customer import Customer
from cpg_inventory.core.entities.inventory import InventoryItem, ItemCategory
from cpg_inventory.core.entities.order import Order, OrderStatus
from cpg_inventory.core.entities.shipment import Shipment, ShipmentStatus
from cpg_inventory.core.exceptions import (
    CustomerNotFoundError,
    InventoryItemNotFoundError,
)
from cpg_inventory.core.interfaces.customer_store import ICustomerStore
from cpg_inventory.core.interfaces.inventory_store import IInventoryStore
from cpg_inventory.core.interfaces.order_store import IOrderStore
from cpg_inventory.core.interfaces.shipment_store import IShipmentStore
from cpg_inventory.core.services.ledger import (
    LedgerConsistency,
    LedgerEntry,
    build_ledger,
    check_consistency,
    for_display,
)
from cpg_inventory.core.services.physical_stock import PhysicalStock, project_inventory

logger = get_logger(__name__)

# Large enough to fetch a whole company's rows for a report
REPORT_ROW_LIMIT = 100_000


@dataclass
class StockValuation:
    total_units: int = 0
    raw_material_value: Decimal = Decimal("0")
    finished_product_value: Decimal = Decimal("0")

    @property
    def overall_value(self) -> Decimal:
        return self.raw_material_value + self.finished_product_value


@dataclass
class InventoryStats:
    total_items: int = 0
    raw_materials: int = 0
    finished_products: int = 0
    low_stock: int = 0


@dataclass
class OrderStats:
    total_orders: int = 0
    total_revenue: Decimal = Decimal("0")
    pending_orders: int = 0

    @property
    def average_order_value(self) -> Decimal:
        if self.total_orders == 0:
            return Decimal("0")
        return self.total_revenue / self.total_orders


@dataclass
class ShippingStats:
    scheduled: int = 0
    in_transit: int = 0
    delivered: int = 0
    total: int = 0


@dataclass
class CustomerStats:
    total_customers: int = 0
    with_email: int = 0
    with_phone: int = 0
    with_address: int = 0


@dataclass
class CustomerOrderHistory:
    customer: Customer
    orders: list[Order] = field(default_factory=list)

    @property
    def total_revenue(self) -> Decimal:
        """Revenue is recognised on completed orders only."""
        return sum(
            (o.total_amount for o in self.orders if o.status == OrderStatus.COMPLETED),
            Decimal("0"),
        )


@dataclass
class ItemHistory:
    item: InventoryItem
    entries: list[LedgerEntry]
    consistency: LedgerConsistency


def stock_valuation(items: Sequence[InventoryItem]) -> StockValuation:
    valuation = StockValuation()
    for item in items:
        valuation.total_units += item.quantity
        if item.category == ItemCategory.RAW:
            valuation.raw_material_value += item.total_value
        elif item.category == ItemCategory.FINISHED:
            valuation.finished_product_value += item.total_value
    return valuation


def inventory_stats(items: Sequence[InventoryItem]) -> InventoryStats:
    return InventoryStats(
        total_items=len(items),
        raw_materials=sum(1 for i in items if i.category == ItemCategory.RAW),
        finished_products=sum(1 for i in items if i.category == ItemCategory.FINISHED),
        low_stock=sum(1 for i in items if i.is_low_stock),
    )


def order_stats(orders: Sequence[Order]) -> OrderStats:
    return OrderStats(
        total_orders=len(orders),
        total_revenue=sum((o.total_amount for o in orders), Decimal("0")),
        pending_orders=sum(1 for o in orders if o.status.is_open),
    )


def shipping_stats(shipments: Sequence[Shipment]) -> ShippingStats:
    return ShippingStats(
        scheduled=sum(1 for s in shipments if s.status == ShipmentStatus.SCHEDULED),
        in_transit=sum(1 for s in shipments if s.status == ShipmentStatus.IN_TRANSIT),
        delivered=sum(1 for s in shipments if s.status == ShipmentStatus.DELIVERED),
        total=len(shipments),
    )


def customer_stats(customers: Sequence[Customer]) -> CustomerStats:
    return CustomerStats(
        total_customers=len(customers),
        with_email=sum(1 for c in customers if c.email),
        with_phone=sum(1 for c in customers if c.phone),
        with_address=sum(1 for c in customers if c.address),
    )


class ReportService:
    """
    Builds company reports from the stores.

    Depends only on core interfaces; stores are injected.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore,
        order_store: IOrderStore,
        shipment_store: IShipmentStore,
        customer_store: ICustomerStore,
    ) -> None:
        self._inventory_store = inventory_store
        self._order_store = order_store
        self._shipment_store = shipment_store
        self._customer_store = customer_store

    async def _all_items(self, company_id: int) -> list[InventoryItem]:
        return await self._inventory_store.list_items(company_id, limit=REPORT_ROW_LIMIT)

    async def stock_valuation(self, company_id: int) -> StockValuation:
        return stock_valuation(await self._all_items(company_id))

    async def inventory_stats(self, company_id: int) -> InventoryStats:
        return inventory_stats(await self._all_items(company_id))

    async def order_stats(self, company_id: int) -> OrderStats:
        orders = await self._order_store.list_orders(company_id, limit=REPORT_ROW_LIMIT)
        return order_stats(orders)

    async def shipping_stats(self, company_id: int) -> ShippingStats:
        shipments = await self._shipment_store.list_shipments(
            company_id, limit=REPORT_ROW_LIMIT
        )
        return shipping_stats(shipments)

    async def customer_stats(self, company_id: int) -> CustomerStats:
        customers = await self._customer_store.list_customers(
            company_id, limit=REPORT_ROW_LIMIT
        )
        return customer_stats(customers)

    async def physical_stock(self, company_id: int) -> list[PhysicalStock]:
        """Physical counts for every item, from all scheduled shipments."""
        items = await self._all_items(company_id)
        shipments = await self._shipment_store.list_shipments(
            company_id, status=ShipmentStatus.SCHEDULED, limit=REPORT_ROW_LIMIT
        )
        return project_inventory(items, shipments)

    async def item_history(self, company_id: int, item_id: int) -> ItemHistory:
        """Ledger for one item, newest first, with a drift check."""
        item = await self._inventory_store.get_item(company_id, item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)

        transactions = await self._inventory_store.list_transactions(company_id, item_id)
        entries = build_ledger(transactions)
        consistency = check_consistency(item, transactions)
        if transactions and not consistency.is_consistent:
            logger.warning(
                "ledger_drift_detected",
                item_id=item_id,
                stored=consistency.stored_quantity,
                ledger=consistency.ledger_quantity,
            )
        return ItemHistory(
            item=item,
            entries=for_display(entries),
            consistency=consistency,
        )

    async def customer_order_history(
        self, company_id: int, customer_id: int
    ) -> CustomerOrderHistory:
        customer = await self._customer_store.get_customer(company_id, customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        orders = await self._order_store.list_orders(
            company_id, customer_id=customer_id, limit=REPORT_ROW_LIMIT
        )
        return CustomerOrderHistory(customer=customer, orders=orders)
