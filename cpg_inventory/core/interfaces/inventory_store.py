"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod

from cpg_inventory.core.entities.inventory import InventoryItem, ItemCategory, Transaction


class IInventoryStore(ABC):
    """Interface for inventory item and ledger transaction persistence.

    Every method is scoped to a company; rows of other companies are
    never visible.
    """

    @abstractmethod
    async def create_item(
        self, item: InventoryItem, transaction: Transaction
    ) -> tuple[InventoryItem, Transaction]:
        """Create an item and its opening ledger transaction atomically."""
        pass

    @abstractmethod
    async def get_item(self, company_id: int, item_id: int) -> InventoryItem | None:
        """Get inventory item by ID."""
        pass

    @abstractmethod
    async def get_item_by_name(
        self, company_id: int, name: str
    ) -> InventoryItem | None:
        """Get inventory item by case-insensitive name."""
        pass

    @abstractmethod
    async def list_items(
        self,
        company_id: int,
        category: ItemCategory | None = None,
        low_stock_only: bool = False,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryItem]:
        """List inventory items, newest first."""
        pass

    @abstractmethod
    async def update_item(self, item: InventoryItem) -> InventoryItem:
        """Update descriptive fields. Quantity is never written here."""
        pass

    @abstractmethod
    async def delete_item(self, company_id: int, item_id: int) -> bool:
        """Delete an item. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def apply_adjustment(self, transaction: Transaction) -> InventoryItem:
        """Atomically add transaction.quantity to the item and log the transaction.

        Raises InsufficientStockError if the result would be negative and
        InventoryItemNotFoundError if the item does not exist. Nothing is
        written in either case.
        """
        pass

    @abstractmethod
    async def list_transactions(
        self, company_id: int, inventory_item_id: int
    ) -> list[Transaction]:
        """Get an item's transactions ordered by created_at ascending."""
        pass

    @abstractmethod
    async def count_transactions(self, company_id: int, inventory_item_id: int) -> int:
        """Count transactions referencing an item."""
        pass
