"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from cpg_inventory.core.entities.company import (
    CustomFieldTable,
    CustomFieldType,
    validate_hex_color,
)
from cpg_inventory.core.entities.inventory import ItemCategory, TransactionType
from cpg_inventory.core.entities.order import OrderStatus
from cpg_inventory.core.entities.shipment import ShipmentStatus, ShipmentType

# --- Inventory ---


class AdjustStockRequest(BaseModel):
    """
    Request to create an item or adjust its stock.

    ``add_new`` creates the item with ``quantity`` as opening stock and
    needs the descriptive fields. Every other action adjusts an existing
    item found by ``item_id`` or, failing that, by name.
    """

    action: TransactionType = Field(..., description="Stock action to apply")
    item_id: int | None = Field(default=None, description="Existing item ID")
    name: str | None = Field(
        default=None,
        min_length=1,
        description="Item name (new item, or lookup when item_id is absent)",
    )
    quantity: int = Field(..., ge=0, description="Magnitude of the change (sign comes from action)")
    category: ItemCategory | None = Field(default=None, description="Item category (add_new)")
    unit: str | None = Field(default=None, description="Unit of measure (add_new)")
    reorder_level: int | None = Field(
        default=None, ge=0, description="Low-stock threshold (add_new)"
    )
    price: Decimal | None = Field(default=None, ge=0, description="Unit price (add_new)")
    custom_data: dict[str, Any] | None = Field(
        default=None, description="Values for company-defined custom fields"
    )
    notes: str | None = Field(default=None, description="Note recorded on the transaction")

    @model_validator(mode="after")
    def check_item_reference(self) -> "AdjustStockRequest":
        if self.item_id is None and not self.name:
            raise ValueError("Either item_id or name is required")
        return self


class UpdateItemRequest(BaseModel):
    """Request to edit an item's descriptive fields. Quantity is not editable."""

    name: str | None = Field(default=None, min_length=1, description="New item name")
    category: ItemCategory | None = Field(default=None, description="Item category")
    unit: str | None = Field(default=None, description="Unit of measure")
    reorder_level: int | None = Field(default=None, ge=0, description="Low-stock threshold")
    price: Decimal | None = Field(default=None, ge=0, description="Unit price")
    custom_data: dict[str, Any] | None = Field(
        default=None, description="Replacement custom field values"
    )


# --- Orders ---


class OrderItemRequest(BaseModel):
    """A single line on a new order."""

    inventory_item_id: int | None = Field(default=None, description="Inventory item ID")
    item_name: str | None = Field(
        default=None, description="Item name, used when no ID is given"
    )
    quantity: int = Field(..., gt=0, description="Units ordered")
    price: Decimal | None = Field(
        default=None,
        ge=0,
        description="Unit price (defaults to the item's current price)",
    )

    @model_validator(mode="after")
    def check_item_reference(self) -> "OrderItemRequest":
        if self.inventory_item_id is None and not self.item_name:
            raise ValueError("Either inventory_item_id or item_name is required")
        return self


class CreateOrderRequest(BaseModel):
    """Request to create an order and deduct its stock."""

    order_number: str | None = Field(
        default=None, description="Order number (generated when omitted)"
    )
    customer_id: int | None = Field(default=None, description="Linked customer ID")
    customer_name: str = Field(..., min_length=1, description="Contact name")
    customer_email: str = Field(..., min_length=1, description="Contact email")
    customer_phone: str = Field(default="", description="Contact phone")
    recipient_name: str | None = Field(default=None, description="Recipient name")
    recipient_email: str | None = Field(default=None, description="Recipient email")
    recipient_phone: str | None = Field(default=None, description="Recipient phone")
    shipping_address: str | None = Field(default=None, description="Shipping address")
    needs_shipping: bool = Field(
        default=False, description="Schedule a shipment for the order"
    )
    scheduled_date: datetime | None = Field(
        default=None, description="Shipment date (defaults to now)"
    )
    carrier: str | None = Field(default=None, description="Carrier for the shipment")
    custom_data: dict[str, Any] | None = Field(
        default=None, description="Values for company-defined custom fields"
    )
    items: list[OrderItemRequest] = Field(
        ..., min_length=1, description="Order lines"
    )


class UpdateOrderStatusRequest(BaseModel):
    """Request to change an order's status."""

    status: OrderStatus = Field(..., description="New status")


# --- Shipments ---


class ShipmentItemRequest(BaseModel):
    """A single line on a manual shipment."""

    inventory_item_id: int | None = Field(default=None, description="Inventory item ID")
    item_name: str | None = Field(default=None, description="Item name")
    quantity: int = Field(..., gt=0, description="Units to ship")

    @model_validator(mode="after")
    def check_item_reference(self) -> "ShipmentItemRequest":
        if self.inventory_item_id is None and not self.item_name:
            raise ValueError("Either inventory_item_id or item_name is required")
        return self


class CreateShipmentRequest(BaseModel):
    """Request to schedule a shipment."""

    shipment_number: str | None = Field(
        default=None, description="Shipment number (generated when omitted)"
    )
    order_id: int | None = Field(default=None, description="Linked order ID")
    shipment_type: ShipmentType = Field(
        default=ShipmentType.SHIPMENT, description="Kind of shipment"
    )
    recipient_name: str | None = Field(
        default=None, description="Recipient (defaults to the order's recipient)"
    )
    recipient_email: str | None = Field(default=None, description="Recipient email")
    recipient_phone: str | None = Field(default=None, description="Recipient phone")
    shipping_address: str | None = Field(default=None, description="Shipping address")
    scheduled_date: datetime | None = Field(
        default=None, description="Scheduled date (defaults to now)"
    )
    tracking_number: str | None = Field(default=None, description="Tracking number")
    carrier: str | None = Field(default=None, description="Carrier")
    notes: str | None = Field(default=None, description="Notes")
    items: list[ShipmentItemRequest] = Field(
        default_factory=list,
        description="Lines to ship (copied from the order when empty)",
    )


class UpdateShipmentStatusRequest(BaseModel):
    """Request to move a shipment through its lifecycle."""

    status: ShipmentStatus = Field(..., description="New status")
    shipped_date: datetime | None = Field(
        default=None, description="Ship date (set to now on in_transit when absent)"
    )


# --- Customers ---


class CreateCustomerRequest(BaseModel):
    """Request to create a customer."""

    name: str = Field(..., min_length=1, description="Customer name")
    email: str | None = Field(default=None, description="Email")
    phone: str | None = Field(default=None, description="Phone")
    address: str | None = Field(default=None, description="Address")


class UpdateCustomerRequest(BaseModel):
    """Request to update a customer; omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1, description="Customer name")
    email: str | None = Field(default=None, description="Email")
    phone: str | None = Field(default=None, description="Phone")
    address: str | None = Field(default=None, description="Address")


# --- Company ---


class CreateCompanyRequest(BaseModel):
    """Request to register a company."""

    name: str = Field(..., min_length=1, description="Company name")
    domain: str = Field(..., min_length=1, description="Company domain")
    primary_color: str | None = Field(default=None, description="Primary hex color")
    accent_color: str | None = Field(default=None, description="Accent hex color")

    @field_validator("primary_color", "accent_color")
    @classmethod
    def check_color(cls, v: str | None) -> str | None:
        return validate_hex_color(v) if v is not None else v


class UpdateBrandingRequest(BaseModel):
    """Request to change branding colors."""

    primary_color: str = Field(..., description="Primary hex color", examples=["#800000"])
    accent_color: str = Field(..., description="Accent hex color", examples=["#D3AF37"])

    @field_validator("primary_color", "accent_color")
    @classmethod
    def check_color(cls, v: str) -> str:
        return validate_hex_color(v)


class CreateCustomFieldRequest(BaseModel):
    """Request to define a custom field."""

    table_name: CustomFieldTable = Field(..., description="Table the field extends")
    field_name: str = Field(..., min_length=1, description="Field name")
    field_type: CustomFieldType = Field(
        default=CustomFieldType.TEXT, description="Value type"
    )
