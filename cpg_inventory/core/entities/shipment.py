"""Shipment domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from cpg_inventory.core.entities.inventory import utcnow


class ShipmentStatus(str, Enum):
    """Shipment lifecycle states."""

    SCHEDULED = "scheduled"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (ShipmentStatus.DELIVERED, ShipmentStatus.CANCELLED)


class ShipmentType(str, Enum):
    """Kinds of outbound movement a shipment can represent."""

    ORDER = "order"
    SHIPMENT = "shipment"
    RESTOCK = "restock"
    ADJUSTMENT = "adjustment"
    SAMPLE = "sample"
    DISTRIBUTOR_PICKUP = "distributor_pickup"
    STORE_DELIVERY = "store_delivery"


class ShipmentLineItem(BaseModel):
    """Item name and quantity copied onto a shipment."""

    id: int | None = None
    shipment_id: int | None = None
    inventory_item_id: int | None = None  # preferred link; name is the fallback
    item_name: str
    quantity: int = Field(gt=0)


class Shipment(BaseModel):
    """Outbound shipment. A scheduled shipment is committed, not yet shipped, stock."""

    id: int | None = None
    company_id: int
    shipment_number: str
    order_id: int | None = None
    shipment_type: ShipmentType = ShipmentType.SHIPMENT
    recipient_name: str
    recipient_email: str | None = None
    recipient_phone: str | None = None
    shipping_address: str | None = None
    scheduled_date: datetime = Field(default_factory=utcnow)
    shipped_date: datetime | None = None
    tracking_number: str | None = None
    carrier: str | None = None
    status: ShipmentStatus = ShipmentStatus.SCHEDULED
    notes: str | None = None
    # True when stock was deducted at order creation; shipping must not deduct again
    stock_committed: bool = False
    items: list[ShipmentLineItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
