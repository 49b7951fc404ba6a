"""
Domain exceptions for the inventory service.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class InventoryError(Exception):
    """Base exception for all inventory service errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(InventoryError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InsufficientStockError(ValidationError):
    """Adjustment would take an item's quantity below zero."""

    def __init__(self, item_name: str, requested: int, available: int):
        shortfall = requested - available
        super().__init__(
            field="quantity",
            message=(
                f"Cannot set '{item_name}' quantity below zero "
                f"(requested {requested}, available {available}, short by {shortfall})"
            ),
            value=requested,
        )
        self.code = "INSUFFICIENT_STOCK"
        self.details.update(
            {
                "item_name": item_name,
                "requested": requested,
                "available": available,
                "shortfall": shortfall,
            }
        )


class DuplicateItemError(ValidationError):
    """An inventory item with the same name already exists."""

    def __init__(self, name: str, existing_id: int | None = None):
        super().__init__(
            field="name",
            message=f"Item '{name}' already exists. Use an adjustment action instead.",
            value=name,
        )
        self.code = "DUPLICATE_ITEM"
        self.details["existing_id"] = existing_id


class CustomFieldValidationError(ValidationError):
    """Custom data does not match the company's field definitions."""

    def __init__(self, field_name: str, reason: str, value: Any = None):
        super().__init__(
            field=f"custom_data.{field_name}",
            message=reason,
            value=value,
        )
        self.code = "CUSTOM_FIELD_INVALID"


class InvalidStatusTransitionError(ValidationError):
    """Requested status change is not allowed."""

    def __init__(self, entity: str, current: str, requested: str):
        super().__init__(
            field="status",
            message=f"Cannot move {entity} from '{current}' to '{requested}'",
            value=requested,
        )
        self.code = "INVALID_STATUS_TRANSITION"
        self.details.update({"entity": entity, "current": current})


# Not-found Exceptions
class NotFoundError(InventoryError):
    """Base exception for missing entities."""

    pass


class InventoryItemNotFoundError(NotFoundError):
    """Inventory item not found."""

    def __init__(self, item_ref: int | str):
        super().__init__(
            f"Inventory item not found: {item_ref}",
            code="ITEM_NOT_FOUND",
            details={"item": item_ref},
        )


class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: int):
        super().__init__(
            f"Order not found: {order_id}",
            code="ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class ShipmentNotFoundError(NotFoundError):
    """Shipment not found."""

    def __init__(self, shipment_id: int):
        super().__init__(
            f"Shipment not found: {shipment_id}",
            code="SHIPMENT_NOT_FOUND",
            details={"shipment_id": shipment_id},
        )


class CustomerNotFoundError(NotFoundError):
    """Customer not found."""

    def __init__(self, customer_id: int):
        super().__init__(
            f"Customer not found: {customer_id}",
            code="CUSTOMER_NOT_FOUND",
            details={"customer_id": customer_id},
        )


class CompanyNotFoundError(NotFoundError):
    """Company not found."""

    def __init__(self, company_id: int):
        super().__init__(
            f"Company not found: {company_id}",
            code="COMPANY_NOT_FOUND",
            details={"company_id": company_id},
        )


class CustomFieldNotFoundError(NotFoundError):
    """Custom field definition not found."""

    def __init__(self, field_id: int):
        super().__init__(
            f"Custom field not found: {field_id}",
            code="CUSTOM_FIELD_NOT_FOUND",
            details={"field_id": field_id},
        )


# Conflict Exceptions
class ConflictError(InventoryError):
    """Operation conflicts with existing data."""

    pass


class ItemHasTransactionsError(ConflictError):
    """Item cannot be deleted while its ledger references it."""

    def __init__(self, item_id: int, transaction_count: int):
        super().__init__(
            f"Inventory item {item_id} has {transaction_count} transactions and cannot be deleted",
            code="ITEM_HAS_TRANSACTIONS",
            details={"item_id": item_id, "transaction_count": transaction_count},
        )


class OrderHasShipmentsError(ConflictError):
    """Order cannot be deleted while shipments reference it."""

    def __init__(self, order_id: int, shipment_count: int):
        super().__init__(
            f"Order {order_id} is referenced by {shipment_count} shipments",
            code="ORDER_HAS_SHIPMENTS",
            details={"order_id": order_id, "shipment_count": shipment_count},
        )


class DuplicateCustomFieldError(ConflictError):
    """Custom field with the same name exists for the table."""

    def __init__(self, table_name: str, field_name: str):
        super().__init__(
            f"Custom field '{field_name}' already exists on {table_name}",
            code="DUPLICATE_CUSTOM_FIELD",
            details={"table_name": table_name, "field_name": field_name},
        )


# Storage Exceptions
class StorageError(InventoryError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(InventoryError):
    """Configuration error."""

    pass
