"""Tests for inventory entities."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from cpg_inventory.core.entities.inventory import (
    InventoryItem,
    ItemCategory,
    StockStatus,
    Transaction,
    TransactionType,
    name_key,
)


def _item(**overrides) -> InventoryItem:
    data = {
        "company_id": 1,
        "name": "Flour",
        "category": ItemCategory.RAW,
        "unit": "kg",
    }
    data.update(overrides)
    return InventoryItem(**data)


class TestInventoryItem:
    """Tests for InventoryItem entity."""

    def test_defaults(self):
        item = _item()
        assert item.id is None
        assert item.quantity == 0
        assert item.reorder_level == 0
        assert item.price == Decimal("0")
        assert item.custom_data == {}
        assert item.created_at.tzinfo is not None

    def test_total_value(self):
        item = _item(quantity=12, price=Decimal("2.50"))
        assert item.total_value == Decimal("30.00")

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            _item(quantity=-1)

    def test_negative_reorder_level_rejected(self):
        with pytest.raises(ValidationError):
            _item(reorder_level=-5)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _item(price=Decimal("-0.01"))

    def test_out_of_stock(self):
        item = _item(quantity=0, reorder_level=10)
        assert item.stock_status == StockStatus.OUT_OF_STOCK
        assert item.is_low_stock is True

    def test_low_stock_at_reorder_level(self):
        item = _item(quantity=10, reorder_level=10)
        assert item.stock_status == StockStatus.LOW_STOCK

    def test_in_stock_above_reorder_level(self):
        item = _item(quantity=70, reorder_level=50)
        assert item.stock_status == StockStatus.IN_STOCK
        assert item.is_low_stock is False

    def test_matches_name_ignores_case_and_whitespace(self):
        item = _item(name="Flour")
        assert item.matches_name("  FLOUR ")
        assert not item.matches_name("Sugar")

    def test_matches_name_folds_unicode(self):
        item = _item(name="Äpfel")
        assert item.matches_name("äpfel")
        assert _item(name="Straße").matches_name("STRASSE")

    def test_name_key(self):
        assert name_key("  Äpfel ") == "äpfel"
        assert name_key("Straße") == name_key("STRASSE")


class TestTransaction:
    """Tests for Transaction entity."""

    def test_signed_quantity_kept(self):
        txn = Transaction(
            company_id=1,
            inventory_item_id=3,
            transaction_type=TransactionType.DAMAGED_GOODS,
            quantity=-30,
        )
        assert txn.quantity == -30
        assert txn.reference_type is None
        assert txn.reference_id is None

    def test_item_id_optional_before_insert(self):
        txn = Transaction(
            company_id=1,
            transaction_type=TransactionType.ADD_NEW,
            quantity=10,
            reference_type="item_creation",
        )
        assert txn.inventory_item_id is None

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Transaction(company_id=1, transaction_type="teleport", quantity=1)
