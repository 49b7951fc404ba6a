"""Tests for SQLiteOrderStore."""

from decimal import Decimal

import pytest

from cpg_inventory.core.entities.customer import Customer
from cpg_inventory.core.entities.inventory import Transaction, TransactionType
from cpg_inventory.core.entities.order import Order, OrderItem, OrderStatus
from cpg_inventory.core.entities.shipment import Shipment, ShipmentLineItem
from cpg_inventory.core.exceptions import InsufficientStockError, OrderHasShipmentsError
from cpg_inventory.infrastructure.storage.sqlite.customer_store import SQLiteCustomerStore
from cpg_inventory.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from cpg_inventory.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from cpg_inventory.infrastructure.storage.sqlite.shipment_store import SQLiteShipmentStore


@pytest.fixture
def store() -> SQLiteOrderStore:
    return SQLiteOrderStore()


@pytest.fixture
def inventory() -> SQLiteInventoryStore:
    return SQLiteInventoryStore()


@pytest.fixture
async def granola(db, inventory, new_item):
    item, _ = await inventory.create_item(*new_item("Granola Bar", quantity=40, price="2.00"))
    return item


def _order(item_id: int | None, quantity: int, number: str = "ORD-000001", **kwargs) -> Order:
    return Order(
        company_id=1,
        order_number=number,
        customer_name="Jane Buyer",
        customer_email="jane@example.com",
        items=[
            OrderItem(
                inventory_item_id=item_id,
                item_name="Granola Bar",
                quantity=quantity,
                price=Decimal("2.00"),
            )
        ],
        **kwargs,
    )


def _deduction(item_id: int, quantity: int) -> Transaction:
    return Transaction(
        company_id=1,
        inventory_item_id=item_id,
        transaction_type=TransactionType.ORDER,
        quantity=-quantity,
        reference_type="order",
        notes="Order placed",
    )


class TestCreateOrder:
    async def test_creates_order_items_and_deducts(self, store, inventory, granola):
        txn = _deduction(granola.id, 5)
        order, shipment = await store.create_order(_order(granola.id, 5), [txn])

        assert order.id is not None
        assert shipment is None
        assert txn.reference_id == order.id

        fetched = await store.get_order(1, order.id)
        assert fetched.total_amount == Decimal("10.00")
        assert [(i.item_name, i.quantity, i.price) for i in fetched.items] == [
            ("Granola Bar", 5, Decimal("2.00"))
        ]
        assert (await inventory.get_item(1, granola.id)).quantity == 35

        history = await inventory.list_transactions(1, granola.id)
        assert history[-1].reference_type == "order"
        assert history[-1].reference_id == order.id

    async def test_creates_linked_shipment(self, store, granola):
        shipment = Shipment(
            company_id=1,
            shipment_number="SHP-1",
            recipient_name="Jane Buyer",
            stock_committed=True,
            items=[ShipmentLineItem(inventory_item_id=granola.id, item_name="Granola Bar", quantity=5)],
        )
        order, shipment = await store.create_order(
            _order(granola.id, 5, needs_shipping=True),
            [_deduction(granola.id, 5)],
            shipment,
        )

        assert shipment.id is not None
        assert shipment.order_id == order.id
        stored = await SQLiteShipmentStore().get_shipment(1, shipment.id)
        assert stored.stock_committed is True
        assert stored.items[0].quantity == 5

    async def test_failed_deduction_rolls_everything_back(self, store, inventory, granola):
        with pytest.raises(InsufficientStockError):
            await store.create_order(_order(granola.id, 50), [_deduction(granola.id, 50)])

        assert await store.list_orders(1) == []
        assert (await inventory.get_item(1, granola.id)).quantity == 40
        assert await inventory.count_transactions(1, granola.id) == 1

    async def test_custom_data_round_trips(self, store, granola):
        order, _ = await store.create_order(
            _order(granola.id, 1, custom_data={"po_number": "PO-77"}),
            [_deduction(granola.id, 1)],
        )
        fetched = await store.get_order(1, order.id)
        assert fetched.custom_data == {"po_number": "PO-77"}


class TestQueries:
    async def test_list_orders_filters(self, store, granola):
        customer = await SQLiteCustomerStore().create_customer(
            Customer(company_id=1, name="Jane Buyer")
        )
        first, _ = await store.create_order(_order(granola.id, 1, "ORD-1"), [])
        second, _ = await store.create_order(
            _order(granola.id, 1, "ORD-2", customer_id=customer.id), []
        )
        await store.update_status(1, first.id, OrderStatus.COMPLETED)

        assert [o.order_number for o in await store.list_orders(1)] == ["ORD-2", "ORD-1"]
        completed = await store.list_orders(1, status=OrderStatus.COMPLETED)
        assert [o.id for o in completed] == [first.id]
        for_customer = await store.list_orders(1, customer_id=customer.id)
        assert [o.id for o in for_customer] == [second.id]
        assert await store.list_orders(2) == []

    async def test_get_order_scoped_to_company(self, store, granola):
        order, _ = await store.create_order(_order(granola.id, 1), [])
        assert await store.get_order(2, order.id) is None


class TestStatusAndDelete:
    async def test_update_status_keeps_stock(self, store, inventory, granola):
        order, _ = await store.create_order(_order(granola.id, 5), [_deduction(granola.id, 5)])

        updated = await store.update_status(1, order.id, OrderStatus.CANCELLED)

        assert updated.status == OrderStatus.CANCELLED
        assert (await inventory.get_item(1, granola.id)).quantity == 35

    async def test_update_status_missing(self, store, db):
        assert await store.update_status(1, 404, OrderStatus.COMPLETED) is None

    async def test_delete_order(self, store, granola):
        order, _ = await store.create_order(_order(granola.id, 1), [])
        assert await store.delete_order(1, order.id) is True
        assert await store.get_order(1, order.id) is None
        assert await store.delete_order(1, order.id) is False

    async def test_delete_refused_with_shipments(self, store, granola):
        shipment = Shipment(
            company_id=1,
            shipment_number="SHP-2",
            recipient_name="Jane Buyer",
            items=[ShipmentLineItem(item_name="Granola Bar", quantity=1)],
        )
        order, _ = await store.create_order(_order(granola.id, 1), [], shipment)
        with pytest.raises(OrderHasShipmentsError):
            await store.delete_order(1, order.id)
