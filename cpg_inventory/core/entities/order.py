"""Order domain entities."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from cpg_inventory.core.entities.inventory import utcnow


class OrderStatus(str, Enum):
    """Order lifecycle states."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_open(self) -> bool:
        return self in (OrderStatus.PENDING, OrderStatus.PROCESSING)


class OrderItem(BaseModel):
    """A single line on an order, with the price captured at order time."""

    id: int | None = None
    order_id: int | None = None
    inventory_item_id: int | None = None  # FK → inventory_items.id
    item_name: str
    quantity: int = Field(gt=0)
    price: Decimal = Field(ge=0)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Order(BaseModel):
    """Customer order; total_amount is always derived from its items."""

    id: int | None = None
    company_id: int
    order_number: str
    customer_id: int | None = None
    customer_name: str
    customer_email: str
    customer_phone: str = ""
    recipient_name: str | None = None
    recipient_email: str | None = None
    recipient_phone: str | None = None
    shipping_address: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    needs_shipping: bool = False
    total_amount: Decimal = Decimal("0")
    custom_data: dict[str, Any] = Field(default_factory=dict)
    items: list[OrderItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def compute_total(self) -> "Order":
        """Compute total_amount as the sum of quantity * price over items."""
        if self.items:
            self.total_amount = sum(
                (item.line_total for item in self.items), Decimal("0")
            )
        return self
