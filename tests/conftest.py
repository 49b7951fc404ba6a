"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from cpg_inventory.core.entities.company import Company
from cpg_inventory.core.entities.inventory import InventoryItem, ItemCategory


@pytest.fixture
def company() -> Company:
    """Company that owns the sample data."""
    return Company(id=1, name="Acme Foods", domain="acme.test")


@pytest.fixture
def flour() -> InventoryItem:
    """Raw material with stock above its reorder level."""
    return InventoryItem(
        id=1,
        company_id=1,
        name="Flour",
        category=ItemCategory.RAW,
        quantity=100,
        unit="kg",
        reorder_level=50,
        price=Decimal("1.50"),
    )


@pytest.fixture
def granola() -> InventoryItem:
    """Finished product."""
    return InventoryItem(
        id=2,
        company_id=1,
        name="Granola Bar",
        category=ItemCategory.FINISHED,
        quantity=40,
        unit="box",
        reorder_level=10,
        price=Decimal("2.00"),
    )


@pytest.fixture
def sample_order_payload() -> dict:
    """Order request body with one line and shipping."""
    return {
        "customer_name": "Jane Buyer",
        "customer_email": "jane@example.com",
        "customer_phone": "555-0100",
        "shipping_address": "1 Market St",
        "needs_shipping": True,
        "items": [{"item_name": "Granola Bar", "quantity": 5, "price": "2.00"}],
    }
