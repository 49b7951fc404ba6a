"""Tests for report statistics."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from cpg_inventory.core.entities.customer import Customer
from cpg_inventory.core.entities.inventory import Transaction, TransactionType
from cpg_inventory.core.entities.order import Order, OrderItem, OrderStatus
from cpg_inventory.core.entities.shipment import Shipment, ShipmentLineItem, ShipmentStatus
from cpg_inventory.core.exceptions import CustomerNotFoundError, InventoryItemNotFoundError
from cpg_inventory.core.services.reports import (
    ReportService,
    customer_stats,
    inventory_stats,
    order_stats,
    shipping_stats,
    stock_valuation,
)


def _order(status: OrderStatus, amount: str) -> Order:
    return Order(
        company_id=1,
        order_number="ORD-1",
        customer_name="Jane",
        customer_email="jane@example.com",
        status=status,
        items=[OrderItem(item_name="Flour", quantity=1, price=Decimal(amount))],
    )


def _shipment(status: ShipmentStatus) -> Shipment:
    return Shipment(
        company_id=1,
        shipment_number="SHP-1",
        recipient_name="Jane",
        status=status,
        items=[ShipmentLineItem(item_name="Flour", quantity=1)],
    )


class TestReductions:
    def test_stock_valuation(self, flour, granola):
        # flour 100 * 1.50, granola 40 * 2.00
        valuation = stock_valuation([flour, granola])
        assert valuation.total_units == 140
        assert valuation.raw_material_value == Decimal("150.00")
        assert valuation.finished_product_value == Decimal("80.00")
        assert valuation.overall_value == Decimal("230.00")

    def test_inventory_stats(self, flour, granola):
        granola.quantity = 10
        stats = inventory_stats([flour, granola])
        assert stats.total_items == 2
        assert stats.raw_materials == 1
        assert stats.finished_products == 1
        assert stats.low_stock == 1

    def test_order_stats(self):
        orders = [
            _order(OrderStatus.PENDING, "10.00"),
            _order(OrderStatus.PROCESSING, "20.00"),
            _order(OrderStatus.COMPLETED, "30.00"),
        ]
        stats = order_stats(orders)
        assert stats.total_orders == 3
        assert stats.total_revenue == Decimal("60.00")
        assert stats.pending_orders == 2
        assert stats.average_order_value == Decimal("20.00")

    def test_order_stats_empty(self):
        stats = order_stats([])
        assert stats.average_order_value == Decimal("0")

    def test_shipping_stats(self):
        stats = shipping_stats(
            [
                _shipment(ShipmentStatus.SCHEDULED),
                _shipment(ShipmentStatus.SCHEDULED),
                _shipment(ShipmentStatus.IN_TRANSIT),
                _shipment(ShipmentStatus.DELIVERED),
                _shipment(ShipmentStatus.CANCELLED),
            ]
        )
        assert (stats.scheduled, stats.in_transit, stats.delivered, stats.total) == (2, 1, 1, 5)

    def test_customer_stats(self):
        stats = customer_stats(
            [
                Customer(company_id=1, name="A", email="a@example.com", phone="1"),
                Customer(company_id=1, name="B", address="2 Elm St"),
                Customer(company_id=1, name="C"),
            ]
        )
        assert stats.total_customers == 3
        assert stats.with_email == 1
        assert stats.with_phone == 1
        assert stats.with_address == 1


@pytest.fixture
def stores():
    inventory = AsyncMock()
    orders = AsyncMock()
    shipments = AsyncMock()
    customers = AsyncMock()
    return inventory, orders, shipments, customers


@pytest.fixture
def service(stores) -> ReportService:
    return ReportService(*stores)


class TestReportService:
    async def test_physical_stock_uses_scheduled_shipments(self, service, stores, granola):
        inventory, _, shipments, _ = stores
        inventory.list_items.return_value = [granola]
        shipments.list_shipments.return_value = [
            Shipment(
                company_id=1,
                shipment_number="SHP-1",
                recipient_name="Jane",
                items=[ShipmentLineItem(inventory_item_id=granola.id, item_name="Granola Bar", quantity=5)],
            )
        ]
        stock = await service.physical_stock(1)
        assert stock[0].physical_quantity == 45
        assert shipments.list_shipments.call_args.kwargs["status"] == ShipmentStatus.SCHEDULED

    async def test_item_history_newest_first(self, service, stores, flour):
        inventory = stores[0]
        flour.quantity = 70
        inventory.get_item.return_value = flour
        inventory.list_transactions.return_value = [
            Transaction(id=1, company_id=1, inventory_item_id=1, transaction_type=TransactionType.ADD_NEW, quantity=100),
            Transaction(id=2, company_id=1, inventory_item_id=1, transaction_type=TransactionType.DAMAGED_GOODS, quantity=-30),
        ]
        history = await service.item_history(1, 1)
        assert [e.running_stock for e in history.entries] == [70, 100]
        assert history.consistency.is_consistent

    async def test_item_history_missing_item(self, service, stores):
        stores[0].get_item.return_value = None
        with pytest.raises(InventoryItemNotFoundError):
            await service.item_history(1, 42)

    async def test_customer_history_counts_completed_revenue(self, service, stores):
        _, orders, _, customers = stores
        customers.get_customer.return_value = Customer(id=3, company_id=1, name="Corner Store")
        orders.list_orders.return_value = [
            _order(OrderStatus.COMPLETED, "12.00"),
            _order(OrderStatus.PENDING, "99.00"),
        ]
        history = await service.customer_order_history(1, 3)
        assert len(history.orders) == 2
        assert history.total_revenue == Decimal("12.00")
        assert orders.list_orders.call_args.kwargs["customer_id"] == 3

    async def test_customer_history_missing_customer(self, service, stores):
        stores[3].get_customer.return_value = None
        with pytest.raises(CustomerNotFoundError):
            await service.customer_order_history(1, 3)
