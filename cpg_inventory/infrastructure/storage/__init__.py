"""Storage infrastructure implementations."""

from cpg_inventory.infrastructure.storage.sqlite import (
    SQLiteCompanyStore,
    SQLiteCustomerStore,
    SQLiteInventoryStore,
    SQLiteOrderStore,
    SQLiteShipmentStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteCompanyStore",
    "SQLiteCustomerStore",
    "SQLiteInventoryStore",
    "SQLiteOrderStore",
    "SQLiteShipmentStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
