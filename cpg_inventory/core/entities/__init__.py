"""Core domain entities."""

from cpg_inventory.core.entities.company import (
    Company,
    CustomField,
    CustomFieldTable,
    CustomFieldType,
)
from cpg_inventory.core.entities.customer import Customer
from cpg_inventory.core.entities.inventory import (
    InventoryItem,
    ItemCategory,
    StockStatus,
    Transaction,
    TransactionType,
)
from cpg_inventory.core.entities.order import Order, OrderItem, OrderStatus
from cpg_inventory.core.entities.shipment import (
    Shipment,
    ShipmentLineItem,
    ShipmentStatus,
    ShipmentType,
)

__all__ = [
    # Company
    "Company",
    "CustomField",
    "CustomFieldTable",
    "CustomFieldType",
    # Customer
    "Customer",
    # Inventory
    "InventoryItem",
    "ItemCategory",
    "StockStatus",
    "Transaction",
    "TransactionType",
    # Orders
    "Order",
    "OrderItem",
    "OrderStatus",
    # Shipments
    "Shipment",
    "ShipmentLineItem",
    "ShipmentStatus",
    "ShipmentType",
]
