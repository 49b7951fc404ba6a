"""Inventory domain entities."""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(UTC)


def name_key(name: str) -> str:
    """Comparison key for item names: trimmed and Unicode case-folded."""
    return name.strip().casefold()


class ItemCategory(str, Enum):
    """Inventory item categories."""

    RAW = "raw"
    FINISHED = "finished"


class StockStatus(str, Enum):
    """Stock level relative to the reorder level."""

    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


class TransactionType(str, Enum):
    """Causes recorded on ledger transactions."""

    ORDER = "order"
    SHIPMENT = "shipment"
    RESTOCK = "restock"
    ADJUSTMENT = "adjustment"
    SAMPLE = "sample"
    DISTRIBUTOR_PICKUP = "distributor_pickup"
    STORE_DELIVERY = "store_delivery"
    ADD_NEW = "add_new"
    DAMAGED_GOODS = "damaged_goods"
    CORRECTION = "correction"
    RETURNS = "returns"
    OTHER = "other"


class InventoryItem(BaseModel):
    """Current stock, reorder level and price for one item of a company."""

    id: int | None = None
    company_id: int
    name: str
    category: ItemCategory
    quantity: int = Field(default=0, ge=0)
    unit: str
    reorder_level: int = Field(default=0, ge=0)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    custom_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def stock_status(self) -> StockStatus:
        if self.quantity == 0:
            return StockStatus.OUT_OF_STOCK
        if self.quantity <= self.reorder_level:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    @property
    def is_low_stock(self) -> bool:
        """Low-stock filter used by the dashboard (includes out of stock)."""
        return self.quantity <= self.reorder_level

    @property
    def total_value(self) -> Decimal:
        """Inventory value = quantity * price."""
        return self.price * self.quantity

    def matches_name(self, name: str) -> bool:
        return name_key(self.name) == name_key(name)


class Transaction(BaseModel):
    """Append-only ledger row: a signed quantity delta for one item."""

    id: int | None = None
    company_id: int
    inventory_item_id: int | None = None  # FK → inventory_items.id, set on insert for new items
    transaction_type: TransactionType
    quantity: int  # signed: positive adds stock, negative removes it
    reference_type: str | None = None  # e.g. item_creation, manual_adjustment, order
    reference_id: int | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
