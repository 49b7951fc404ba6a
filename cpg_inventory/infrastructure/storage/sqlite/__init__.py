"""SQLite storage implementations."""

from cpg_inventory.infrastructure.storage.sqlite.company_store import SQLiteCompanyStore
from cpg_inventory.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from cpg_inventory.infrastructure.storage.sqlite.customer_store import SQLiteCustomerStore
from cpg_inventory.infrastructure.storage.sqlite.inventory_store import (
    SQLiteInventoryStore,
)
from cpg_inventory.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from cpg_inventory.infrastructure.storage.sqlite.shipment_store import SQLiteShipmentStore

# Singleton instances
_inventory_store: SQLiteInventoryStore | None = None
_order_store: SQLiteOrderStore | None = None
_shipment_store: SQLiteShipmentStore | None = None
_customer_store: SQLiteCustomerStore | None = None
_company_store: SQLiteCompanyStore | None = None


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_order_store() -> SQLiteOrderStore:
    """Get singleton order store instance."""
    global _order_store
    if _order_store is None:
        _order_store = SQLiteOrderStore()
    return _order_store


async def get_shipment_store() -> SQLiteShipmentStore:
    """Get singleton shipment store instance."""
    global _shipment_store
    if _shipment_store is None:
        _shipment_store = SQLiteShipmentStore()
    return _shipment_store


async def get_customer_store() -> SQLiteCustomerStore:
    """Get singleton customer store instance."""
    global _customer_store
    if _customer_store is None:
        _customer_store = SQLiteCustomerStore()
    return _customer_store


async def get_company_store() -> SQLiteCompanyStore:
    """Get singleton company store instance."""
    global _company_store
    if _company_store is None:
        _company_store = SQLiteCompanyStore()
    return _company_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteCompanyStore",
    "SQLiteCustomerStore",
    "SQLiteInventoryStore",
    "SQLiteOrderStore",
    "SQLiteShipmentStore",
    # Factory functions
    "get_company_store",
    "get_customer_store",
    "get_inventory_store",
    "get_order_store",
    "get_shipment_store",
]
