"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

# --- Inventory ---


class InventoryItemResponse(BaseModel):
    """Inventory item with derived stock status and value."""

    id: int
    name: str
    category: str
    quantity: int
    unit: str
    reorder_level: int
    price: Decimal
    total_value: Decimal = Field(..., description="quantity * price")
    stock_status: str = Field(..., description="out_of_stock, low_stock or in_stock")
    custom_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class InventoryListResponse(BaseModel):
    """List of inventory items."""

    items: list[InventoryItemResponse]
    total: int


class TransactionResponse(BaseModel):
    """Ledger transaction."""

    id: int
    inventory_item_id: int
    transaction_type: str
    quantity: int = Field(..., description="Signed quantity change")
    reference_type: str | None = None
    reference_id: int | None = None
    notes: str | None = None
    created_at: datetime


class AdjustStockResponse(BaseModel):
    """Result of creating or adjusting an item."""

    item: InventoryItemResponse
    transaction: TransactionResponse
    previous_quantity: int
    created: bool = Field(default=False, description="True when the item was created")


class LedgerEntryResponse(TransactionResponse):
    """Transaction with the running stock right after it."""

    running_stock: int


class ItemHistoryResponse(BaseModel):
    """Item ledger, newest first, with a drift check."""

    item: InventoryItemResponse
    entries: list[LedgerEntryResponse]
    ledger_quantity: int
    drift: int
    is_consistent: bool


class PhysicalStockResponse(BaseModel):
    """Stored count plus stock earmarked on scheduled shipments."""

    item_id: int
    name: str
    unit: str
    stored_quantity: int
    committed_quantity: int
    physical_quantity: int


# --- Orders ---


class OrderItemResponse(BaseModel):
    """Order line in response."""

    id: int
    inventory_item_id: int | None = None
    item_name: str
    quantity: int
    price: Decimal
    line_total: Decimal


class OrderResponse(BaseModel):
    """Order response DTO."""

    id: int
    order_number: str
    customer_id: int | None = None
    customer_name: str
    customer_email: str
    customer_phone: str = ""
    recipient_name: str | None = None
    recipient_email: str | None = None
    recipient_phone: str | None = None
    shipping_address: str | None = None
    status: str
    needs_shipping: bool
    total_amount: Decimal
    custom_data: dict[str, Any] = Field(default_factory=dict)
    items: list[OrderItemResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class OrderListResponse(BaseModel):
    """List of orders."""

    orders: list[OrderResponse]
    total: int


# --- Shipments ---


class ShipmentLineItemResponse(BaseModel):
    """Shipment line in response."""

    id: int
    inventory_item_id: int | None = None
    item_name: str
    quantity: int


class ShipmentResponse(BaseModel):
    """Shipment response DTO."""

    id: int
    shipment_number: str
    order_id: int | None = None
    shipment_type: str
    recipient_name: str
    recipient_email: str | None = None
    recipient_phone: str | None = None
    shipping_address: str | None = None
    scheduled_date: datetime
    shipped_date: datetime | None = None
    tracking_number: str | None = None
    carrier: str | None = None
    status: str
    notes: str | None = None
    stock_committed: bool
    items: list[ShipmentLineItemResponse] = Field(default_factory=list)
    created_at: datetime


class ShipmentListResponse(BaseModel):
    """List of shipments."""

    shipments: list[ShipmentResponse]
    total: int


class CreateOrderResponse(BaseModel):
    """Created order with its ledger rows and scheduled shipment."""

    order: OrderResponse
    transactions: list[TransactionResponse]
    shipment: ShipmentResponse | None = None


class UpdateShipmentStatusResponse(BaseModel):
    """Shipment after a status change, with any stock it deducted."""

    shipment: ShipmentResponse
    transactions: list[TransactionResponse] = Field(default_factory=list)
    skipped_items: list[str] = Field(
        default_factory=list,
        description="Line items with no matching inventory item",
    )


# --- Customers ---


class CustomerResponse(BaseModel):
    """Customer response DTO."""

    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime


class CustomerListResponse(BaseModel):
    """List of customers."""

    customers: list[CustomerResponse]
    total: int


class CustomerOrderHistoryResponse(BaseModel):
    """A customer's orders, newest first."""

    customer: CustomerResponse
    orders: list[OrderResponse]
    total_orders: int
    total_revenue: Decimal = Field(..., description="Revenue from completed orders")


# --- Reports ---


class StockValuationResponse(BaseModel):
    total_units: int
    raw_material_value: Decimal
    finished_product_value: Decimal
    overall_value: Decimal


class InventoryStatsResponse(BaseModel):
    total_items: int
    raw_materials: int
    finished_products: int
    low_stock: int


class OrderStatsResponse(BaseModel):
    total_orders: int
    total_revenue: Decimal
    pending_orders: int
    average_order_value: Decimal


class ShippingStatsResponse(BaseModel):
    scheduled: int
    in_transit: int
    delivered: int
    total: int


class CustomerStatsResponse(BaseModel):
    total_customers: int
    with_email: int
    with_phone: int
    with_address: int


class DashboardResponse(BaseModel):
    """All dashboard summaries in one payload."""

    inventory: InventoryStatsResponse
    valuation: StockValuationResponse
    orders: OrderStatsResponse
    shipping: ShippingStatsResponse
    customers: CustomerStatsResponse


# --- Company ---


class CompanyResponse(BaseModel):
    """Company response DTO."""

    id: int
    name: str
    domain: str
    primary_color: str
    accent_color: str
    created_at: datetime


class BrandingResponse(BaseModel):
    """Branding colors and the CSS variables derived from them."""

    primary_color: str
    accent_color: str
    css_variables: dict[str, str]


class CustomFieldResponse(BaseModel):
    """Custom field definition."""

    id: int
    table_name: str
    field_name: str
    field_type: str
    field_order: int


class CustomFieldListResponse(BaseModel):
    """Definitions for one table, in display order."""

    table_name: str
    fields: list[CustomFieldResponse]


# --- System ---


class ComponentHealthResponse(BaseModel):
    """Health status of a backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict[str, Any] | None = Field(
        default=None, description="Structured error context"
    )
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
