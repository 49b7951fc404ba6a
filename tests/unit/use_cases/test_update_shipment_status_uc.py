"""Tests for UpdateShipmentStatusUseCase."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from cpg_inventory.application.dto.requests import UpdateShipmentStatusRequest
from cpg_inventory.application.use_cases.update_shipment_status import (
    UpdateShipmentStatusUseCase,
)
from cpg_inventory.core.entities.inventory import TransactionType
from cpg_inventory.core.entities.shipment import Shipment, ShipmentLineItem, ShipmentStatus
from cpg_inventory.core.exceptions import (
    InsufficientStockError,
    InvalidStatusTransitionError,
    ShipmentNotFoundError,
)


@pytest.fixture
def mock_shipment_store():
    store = AsyncMock()
    store.update_status.side_effect = lambda shipment, transactions, **kwargs: shipment
    return store


@pytest.fixture
def mock_inventory_store():
    return AsyncMock()


@pytest.fixture
def use_case(mock_shipment_store, mock_inventory_store):
    return UpdateShipmentStatusUseCase(
        shipment_store=mock_shipment_store, inventory_store=mock_inventory_store
    )


def _shipment(committed: bool, *lines: ShipmentLineItem, status=ShipmentStatus.SCHEDULED) -> Shipment:
    return Shipment(
        id=5,
        company_id=1,
        shipment_number="SHP-1",
        recipient_name="Store 12",
        status=status,
        stock_committed=committed,
        items=list(lines) or [ShipmentLineItem(inventory_item_id=1, item_name="Flour", quantity=10)],
    )


def _request(status: str, **kwargs) -> UpdateShipmentStatusRequest:
    return UpdateShipmentStatusRequest(status=status, **kwargs)


class TestUpdateShipmentStatusUseCase:
    async def test_uncommitted_shipment_deducts_in_transit(
        self, use_case, mock_shipment_store, mock_inventory_store, flour
    ):
        mock_shipment_store.get_shipment.return_value = _shipment(False)
        mock_inventory_store.get_item.return_value = flour

        result = await use_case.execute(1, 5, _request("in_transit"))

        assert result.shipment.status == ShipmentStatus.IN_TRANSIT
        assert result.shipment.shipped_date is not None
        assert result.shipment.stock_committed is True
        assert len(result.transactions) == 1
        txn = result.transactions[0]
        assert txn.transaction_type == TransactionType.SHIPMENT
        assert txn.quantity == -10
        assert txn.reference_type == "shipment"
        assert txn.reference_id == 5
        assert txn.notes == "Shipped for order"
        _, transactions = mock_shipment_store.update_status.call_args[0]
        assert transactions == result.transactions

    async def test_committed_shipment_does_not_deduct_again(
        self, use_case, mock_shipment_store, mock_inventory_store
    ):
        mock_shipment_store.get_shipment.return_value = _shipment(True)

        result = await use_case.execute(1, 5, _request("in_transit"))

        assert result.transactions == []
        mock_inventory_store.get_item.assert_not_called()

    async def test_store_write_guarded_on_read_state(
        self, use_case, mock_shipment_store, mock_inventory_store, flour
    ):
        mock_shipment_store.get_shipment.return_value = _shipment(False)
        mock_inventory_store.get_item.return_value = flour

        await use_case.execute(1, 5, _request("in_transit"))

        kwargs = mock_shipment_store.update_status.call_args.kwargs
        assert kwargs["expected_status"] == ShipmentStatus.SCHEDULED
        assert kwargs["expected_committed"] is False

    async def test_lost_race_surfaces_transition_error(
        self, use_case, mock_shipment_store, mock_inventory_store, flour
    ):
        mock_shipment_store.get_shipment.return_value = _shipment(False)
        mock_inventory_store.get_item.return_value = flour
        mock_shipment_store.update_status.side_effect = InvalidStatusTransitionError(
            "shipment", "in_transit", "in_transit"
        )

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(1, 5, _request("in_transit"))

    async def test_unmatched_lines_skipped(
        self, use_case, mock_shipment_store, mock_inventory_store, flour
    ):
        mock_shipment_store.get_shipment.return_value = _shipment(
            False,
            ShipmentLineItem(item_name="Flour", quantity=4),
            ShipmentLineItem(item_name="Mystery Box", quantity=1),
        )
        mock_inventory_store.get_item_by_name.side_effect = (
            lambda company_id, name: flour if name == "Flour" else None
        )

        result = await use_case.execute(1, 5, _request("in_transit"))

        assert result.skipped_items == ["Mystery Box"]
        assert [t.quantity for t in result.transactions] == [-4]

    async def test_insufficient_stock_aborts(
        self, use_case, mock_shipment_store, mock_inventory_store, flour
    ):
        flour.quantity = 3
        mock_shipment_store.get_shipment.return_value = _shipment(False)
        mock_inventory_store.get_item.return_value = flour

        with pytest.raises(InsufficientStockError):
            await use_case.execute(1, 5, _request("in_transit"))
        mock_shipment_store.update_status.assert_not_called()

    async def test_given_shipped_date_kept(self, use_case, mock_shipment_store):
        mock_shipment_store.get_shipment.return_value = _shipment(True)
        shipped = datetime(2024, 5, 1, 8, 30, tzinfo=UTC)

        result = await use_case.execute(1, 5, _request("in_transit", shipped_date=shipped))

        assert result.shipment.shipped_date == shipped

    async def test_delivered_just_updates_status(
        self, use_case, mock_shipment_store, mock_inventory_store
    ):
        mock_shipment_store.get_shipment.return_value = _shipment(
            True, status=ShipmentStatus.IN_TRANSIT
        )

        result = await use_case.execute(1, 5, _request("delivered"))

        assert result.shipment.status == ShipmentStatus.DELIVERED
        assert result.transactions == []

    async def test_leaving_terminal_status_rejected(self, use_case, mock_shipment_store):
        mock_shipment_store.get_shipment.return_value = _shipment(
            True, status=ShipmentStatus.DELIVERED
        )
        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(1, 5, _request("scheduled"))
        mock_shipment_store.update_status.assert_not_called()

    async def test_same_status_is_noop(self, use_case, mock_shipment_store):
        mock_shipment_store.get_shipment.return_value = _shipment(False)
        result = await use_case.execute(1, 5, _request("scheduled"))
        assert result.transactions == []
        mock_shipment_store.update_status.assert_not_called()

    async def test_missing_shipment(self, use_case, mock_shipment_store):
        mock_shipment_store.get_shipment.return_value = None
        with pytest.raises(ShipmentNotFoundError):
            await use_case.execute(1, 5, _request("in_transit"))
