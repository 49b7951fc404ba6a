"""Company, branding and custom field entities."""

import re
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from cpg_inventory.core.entities.inventory import utcnow

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def validate_hex_color(value: str) -> str:
    if not HEX_COLOR.match(value):
        raise ValueError(f"Invalid hex color: {value}")
    return value


class Company(BaseModel):
    """Tenant owning all inventory, orders, shipments and customers."""

    id: int | None = None
    name: str
    domain: str
    primary_color: str = "#800000"
    accent_color: str = "#D3AF37"
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("primary_color", "accent_color")
    @classmethod
    def check_color(cls, v: str) -> str:
        return validate_hex_color(v)


class CustomFieldTable(str, Enum):
    """Tables that accept admin-defined extra fields."""

    INVENTORY_ITEMS = "inventory_items"
    ORDERS = "orders"


class CustomFieldType(str, Enum):
    """Value types a custom field may hold."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


class CustomField(BaseModel):
    """Definition of one extra field on a company's table."""

    id: int | None = None
    company_id: int
    table_name: CustomFieldTable
    field_name: str = Field(min_length=1)
    field_type: CustomFieldType = CustomFieldType.TEXT
    field_order: int = 0
    created_at: datetime = Field(default_factory=utcnow)
