"""Unit tests for domain exceptions."""

import pytest

from cpg_inventory.core.exceptions import (
    CompanyNotFoundError,
    ConflictError,
    CustomFieldValidationError,
    DatabaseError,
    DuplicateCustomFieldError,
    DuplicateItemError,
    InsufficientStockError,
    InvalidStatusTransitionError,
    InventoryError,
    InventoryItemNotFoundError,
    ItemHasTransactionsError,
    NotFoundError,
    OrderHasShipmentsError,
    OrderNotFoundError,
    ShipmentNotFoundError,
    StorageError,
    ValidationError,
)


class TestInventoryError:
    """Tests for the base exception."""

    def test_basic_initialization(self):
        error = InventoryError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "InventoryError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = InventoryError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = InventoryError("Test error", code="TEST_CODE", details={"extra": "info"})
        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }


class TestValidationErrors:
    def test_validation_error_details(self):
        error = ValidationError("quantity", "must be positive", -3)
        assert error.code == "VALIDATION_ERROR"
        assert error.details["field"] == "quantity"
        assert error.details["value"] == "-3"

    def test_validation_error_truncates_value(self):
        error = ValidationError("name", "too long", "x" * 500)
        assert len(error.details["value"]) == 100

    def test_insufficient_stock(self):
        error = InsufficientStockError(item_name="Flour", requested=25, available=20)
        assert isinstance(error, ValidationError)
        assert error.code == "INSUFFICIENT_STOCK"
        assert error.details["shortfall"] == 5
        assert error.details["available"] == 20
        assert "Flour" in error.message

    def test_duplicate_item(self):
        error = DuplicateItemError("Flour", existing_id=4)
        assert isinstance(error, ValidationError)
        assert error.code == "DUPLICATE_ITEM"
        assert error.details["existing_id"] == 4

    def test_custom_field_validation(self):
        error = CustomFieldValidationError("lot", "Expected text", 5)
        assert error.code == "CUSTOM_FIELD_INVALID"
        assert error.details["field"] == "custom_data.lot"

    def test_invalid_status_transition(self):
        error = InvalidStatusTransitionError("shipment", "delivered", "scheduled")
        assert error.code == "INVALID_STATUS_TRANSITION"
        assert error.details["current"] == "delivered"


class TestNotFoundErrors:
    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (InventoryItemNotFoundError(1), "ITEM_NOT_FOUND"),
            (OrderNotFoundError(2), "ORDER_NOT_FOUND"),
            (ShipmentNotFoundError(3), "SHIPMENT_NOT_FOUND"),
            (CompanyNotFoundError(4), "COMPANY_NOT_FOUND"),
        ],
    )
    def test_codes(self, error, code):
        assert isinstance(error, NotFoundError)
        assert error.code == code

    def test_item_lookup_by_name(self):
        error = InventoryItemNotFoundError("Sugar")
        assert error.details["item"] == "Sugar"


class TestConflictErrors:
    def test_item_has_transactions(self):
        error = ItemHasTransactionsError(7, 3)
        assert isinstance(error, ConflictError)
        assert error.details == {"item_id": 7, "transaction_count": 3}

    def test_order_has_shipments(self):
        error = OrderHasShipmentsError(9, 1)
        assert isinstance(error, ConflictError)
        assert error.code == "ORDER_HAS_SHIPMENTS"

    def test_duplicate_custom_field(self):
        error = DuplicateCustomFieldError("orders", "po_number")
        assert isinstance(error, ConflictError)


class TestStorageErrors:
    def test_database_error(self):
        error = DatabaseError("insert", "disk full")
        assert isinstance(error, StorageError)
        assert error.code == "DATABASE_ERROR"
        assert "disk full" in error.message
