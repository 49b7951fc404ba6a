"""Tests for CreateOrderUseCase."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from cpg_inventory.application.dto.requests import CreateOrderRequest
from cpg_inventory.application.use_cases.create_order import CreateOrderUseCase
from cpg_inventory.core.entities.inventory import TransactionType
from cpg_inventory.core.entities.shipment import ShipmentStatus, ShipmentType
from cpg_inventory.core.exceptions import (
    CustomFieldValidationError,
    InsufficientStockError,
    InventoryItemNotFoundError,
)
from cpg_inventory.core.services.physical_stock import physical_quantity


@pytest.fixture
def mock_inventory_store():
    return AsyncMock()


@pytest.fixture
def mock_order_store():
    store = AsyncMock()

    async def create_order(order, transactions, shipment=None):
        order.id = 7
        for txn in transactions:
            txn.reference_id = order.id
        if shipment is not None:
            shipment.id = 3
            shipment.order_id = order.id
        return order, shipment

    store.create_order.side_effect = create_order
    return store


@pytest.fixture
def mock_company_store():
    store = AsyncMock()
    store.list_custom_fields.return_value = []
    return store


@pytest.fixture
def use_case(mock_inventory_store, mock_order_store, mock_company_store):
    return CreateOrderUseCase(
        inventory_store=mock_inventory_store,
        order_store=mock_order_store,
        company_store=mock_company_store,
    )


class TestCreateOrderUseCase:
    async def test_order_with_shipping(
        self, use_case, mock_inventory_store, mock_order_store, granola, sample_order_payload
    ):
        """Order (X, 5, 2.00) with shipping deducts 5 and schedules {X, 5}."""
        mock_inventory_store.get_item_by_name.return_value = granola

        result = await use_case.execute(1, CreateOrderRequest(**sample_order_payload))

        order = result.order
        assert order.id == 7
        assert order.order_number.startswith("ORD-")
        assert order.total_amount == Decimal("10.00")
        assert order.items[0].inventory_item_id == granola.id

        assert len(result.transactions) == 1
        txn = result.transactions[0]
        assert txn.transaction_type == TransactionType.ORDER
        assert txn.quantity == -5
        assert txn.reference_type == "order"
        assert txn.reference_id == 7

        shipment = result.shipment
        assert shipment is not None
        assert shipment.status == ShipmentStatus.SCHEDULED
        assert shipment.shipment_type == ShipmentType.ORDER
        assert shipment.stock_committed is True
        assert shipment.shipment_number.startswith("SHP-")
        assert [(i.item_name, i.quantity) for i in shipment.items] == [("Granola Bar", 5)]
        assert shipment.recipient_name == "Jane Buyer"

        # After the store applies -5, the physical count is the pre-order quantity
        granola.quantity += txn.quantity
        assert physical_quantity(granola, [shipment]) == 40

    async def test_without_shipping(
        self, use_case, mock_inventory_store, granola, sample_order_payload
    ):
        mock_inventory_store.get_item_by_name.return_value = granola
        sample_order_payload["needs_shipping"] = False

        result = await use_case.execute(1, CreateOrderRequest(**sample_order_payload))

        assert result.shipment is None
        assert len(result.transactions) == 1

    async def test_price_defaults_to_item_price(
        self, use_case, mock_inventory_store, flour, sample_order_payload
    ):
        mock_inventory_store.get_item.return_value = flour
        sample_order_payload["items"] = [{"inventory_item_id": 1, "quantity": 4}]

        result = await use_case.execute(1, CreateOrderRequest(**sample_order_payload))

        assert result.order.items[0].price == Decimal("1.50")
        assert result.order.total_amount == Decimal("6.00")

    async def test_supplied_order_number_kept(
        self, use_case, mock_inventory_store, granola, sample_order_payload
    ):
        mock_inventory_store.get_item_by_name.return_value = granola
        sample_order_payload["order_number"] = "PO-42"
        result = await use_case.execute(1, CreateOrderRequest(**sample_order_payload))
        assert result.order.order_number == "PO-42"

    async def test_unknown_item_rejected(
        self, use_case, mock_inventory_store, mock_order_store, sample_order_payload
    ):
        mock_inventory_store.get_item_by_name.return_value = None

        with pytest.raises(InventoryItemNotFoundError):
            await use_case.execute(1, CreateOrderRequest(**sample_order_payload))
        mock_order_store.create_order.assert_not_called()

    async def test_insufficient_stock_rejected_before_write(
        self, use_case, mock_inventory_store, mock_order_store, granola, sample_order_payload
    ):
        granola.quantity = 3
        mock_inventory_store.get_item_by_name.return_value = granola

        with pytest.raises(InsufficientStockError):
            await use_case.execute(1, CreateOrderRequest(**sample_order_payload))
        mock_order_store.create_order.assert_not_called()

    async def test_repeated_item_checked_in_aggregate(
        self, use_case, mock_inventory_store, mock_order_store, granola, sample_order_payload
    ):
        granola.quantity = 8
        mock_inventory_store.get_item_by_name.return_value = granola
        sample_order_payload["items"] = [
            {"item_name": "Granola Bar", "quantity": 5},
            {"item_name": "granola bar", "quantity": 5},
        ]

        with pytest.raises(InsufficientStockError):
            await use_case.execute(1, CreateOrderRequest(**sample_order_payload))
        mock_order_store.create_order.assert_not_called()

    async def test_invalid_custom_data_rejected(
        self, use_case, mock_inventory_store, mock_order_store, granola, sample_order_payload
    ):
        mock_inventory_store.get_item_by_name.return_value = granola
        sample_order_payload["custom_data"] = {"unknown": 1}

        with pytest.raises(CustomFieldValidationError):
            await use_case.execute(1, CreateOrderRequest(**sample_order_payload))
        mock_order_store.create_order.assert_not_called()

    async def test_to_response(self, use_case, mock_inventory_store, granola, sample_order_payload):
        mock_inventory_store.get_item_by_name.return_value = granola
        result = await use_case.execute(1, CreateOrderRequest(**sample_order_payload))
        response = use_case.to_response(result)
        assert response.order.id == 7
        assert response.shipment is not None
        assert response.transactions[0].quantity == -5
