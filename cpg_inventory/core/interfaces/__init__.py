"""Core interfaces (ports) for dependency injection."""

from cpg_inventory.core.interfaces.company_store import ICompanyStore
from cpg_inventory.core.interfaces.customer_store import ICustomerStore
from cpg_inventory.core.interfaces.inventory_store import IInventoryStore
from cpg_inventory.core.interfaces.order_store import IOrderStore
from cpg_inventory.core.interfaces.shipment_store import IShipmentStore

__all__ = [
    "ICompanyStore",
    "ICustomerStore",
    "IInventoryStore",
    "IOrderStore",
    "IShipmentStore",
]
