"""SQLite implementation of inventory storage."""

import json

import aiosqlite

from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.inventory import (
    InventoryItem,
    ItemCategory,
    Transaction,
    TransactionType,
    name_key,
    utcnow,
)
from cpg_inventory.core.exceptions import (
    DatabaseError,
    DuplicateItemError,
    InventoryItemNotFoundError,
    ItemHasTransactionsError,
)
from cpg_inventory.core.interfaces.inventory_store import IInventoryStore
from cpg_inventory.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from cpg_inventory.infrastructure.storage.sqlite.ledger_writes import (
    apply_stock_delta,
    insert_transaction,
    load_json,
    parse_datetime,
    parse_decimal,
)

logger = get_logger(__name__)


def _integrity_to_domain(item: InventoryItem, error: aiosqlite.IntegrityError) -> Exception:
    if "UNIQUE" in str(error):
        return DuplicateItemError(item.name)
    return DatabaseError("inventory_item_write", str(error))


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory item and ledger transaction storage."""

    async def create_item(
        self, item: InventoryItem, transaction: Transaction
    ) -> tuple[InventoryItem, Transaction]:
        """Create an item and its opening transaction in one database transaction."""
        now = utcnow()
        item.created_at = now
        item.updated_at = now
        async with get_transaction("create_item") as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO inventory_items (
                        company_id, name, name_key, category, quantity, unit,
                        reorder_level, price, custom_data_json,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        item.company_id,
                        item.name,
                        name_key(item.name),
                        item.category.value,
                        item.quantity,
                        item.unit,
                        item.reorder_level,
                        str(item.price),
                        json.dumps(item.custom_data),
                        item.created_at.isoformat(),
                        item.updated_at.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise _integrity_to_domain(item, e) from e
            item.id = cursor.lastrowid

            transaction.inventory_item_id = item.id
            transaction.created_at = now
            await insert_transaction(conn, transaction)

            logger.info(
                "inventory_item_created",
                item_id=item.id,
                company_id=item.company_id,
                name=item.name,
                quantity=item.quantity,
            )
            return item, transaction

    async def get_item(self, company_id: int, item_id: int) -> InventoryItem | None:
        """Get inventory item by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_items WHERE id = ? AND company_id = ?",
                (item_id, company_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_inventory_item(row)

    async def get_item_by_name(
        self, company_id: int, name: str
    ) -> InventoryItem | None:
        """Get inventory item by trimmed, case-folded name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_items
                WHERE company_id = ? AND name_key = ?
                """,
                (company_id, name_key(name)),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_inventory_item(row)

    async def list_items(
        self,
        company_id: int,
        category: ItemCategory | None = None,
        low_stock_only: bool = False,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryItem]:
        """List inventory items with filters, newest first."""
        conditions = ["company_id = ?"]
        params: list = [company_id]
        if category is not None:
            conditions.append("category = ?")
            params.append(category.value)
        if low_stock_only:
            conditions.append("quantity <= reorder_level")
        if search:
            conditions.append("name_key LIKE ?")
            params.append(f"%{search.casefold()}%")
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM inventory_items
                WHERE {" AND ".join(conditions)}
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_inventory_item(row) for row in rows]

    async def update_item(self, item: InventoryItem) -> InventoryItem:
        """Update descriptive fields; quantity only changes through the ledger."""
        item.updated_at = utcnow()
        async with get_transaction() as conn:
            try:
                cursor = await conn.execute(
                    """
                    UPDATE inventory_items SET
                        name = ?,
                        name_key = ?,
                        category = ?,
                        unit = ?,
                        reorder_level = ?,
                        price = ?,
                        custom_data_json = ?,
                        updated_at = ?
                    WHERE id = ? AND company_id = ?
                    """,
                    (
                        item.name,
                        name_key(item.name),
                        item.category.value,
                        item.unit,
                        item.reorder_level,
                        str(item.price),
                        json.dumps(item.custom_data),
                        item.updated_at.isoformat(),
                        item.id,
                        item.company_id,
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise _integrity_to_domain(item, e) from e
            if cursor.rowcount == 0:
                raise InventoryItemNotFoundError(item.id)  # type: ignore[arg-type]

            cursor = await conn.execute(
                "SELECT quantity FROM inventory_items WHERE id = ?", (item.id,)
            )
            item.quantity = (await cursor.fetchone())["quantity"]
            logger.info("inventory_item_updated", item_id=item.id)
            return item

    async def delete_item(self, company_id: int, item_id: int) -> bool:
        """Delete an item that has no ledger history."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                SELECT COUNT(*) FROM inventory_transactions
                WHERE company_id = ? AND inventory_item_id = ?
                """,
                (company_id, item_id),
            )
            count = (await cursor.fetchone())[0]
            if count:
                raise ItemHasTransactionsError(item_id, count)

            cursor = await conn.execute(
                "DELETE FROM inventory_items WHERE id = ? AND company_id = ?",
                (item_id, company_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("inventory_item_deleted", item_id=item_id)
            return deleted

    async def apply_adjustment(self, transaction: Transaction) -> InventoryItem:
        """Apply a signed delta and log it, atomically."""
        transaction.created_at = utcnow()
        async with get_transaction("apply_adjustment") as conn:
            new_quantity = await apply_stock_delta(conn, transaction)
            cursor = await conn.execute(
                "SELECT * FROM inventory_items WHERE id = ?",
                (transaction.inventory_item_id,),
            )
            item = self._row_to_inventory_item(await cursor.fetchone())

        logger.info(
            "stock_adjusted",
            item_id=transaction.inventory_item_id,
            type=transaction.transaction_type.value,
            delta=transaction.quantity,
            new_quantity=new_quantity,
            transaction_id=transaction.id,
        )
        return item

    async def list_transactions(
        self, company_id: int, inventory_item_id: int
    ) -> list[Transaction]:
        """Get an item's transactions, oldest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_transactions
                WHERE company_id = ? AND inventory_item_id = ?
                ORDER BY created_at ASC, id ASC
                """,
                (company_id, inventory_item_id),
            )
            rows = await cursor.fetchall()
            return [self._row_to_transaction(row) for row in rows]

    async def count_transactions(self, company_id: int, inventory_item_id: int) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT COUNT(*) FROM inventory_transactions
                WHERE company_id = ? AND inventory_item_id = ?
                """,
                (company_id, inventory_item_id),
            )
            return (await cursor.fetchone())[0]

    @staticmethod
    def _row_to_inventory_item(row: aiosqlite.Row) -> InventoryItem:
        """Convert a database row to an InventoryItem entity."""
        created_at = parse_datetime(row["created_at"]) or utcnow()
        return InventoryItem(
            id=row["id"],
            company_id=row["company_id"],
            name=row["name"],
            category=ItemCategory(row["category"]),
            quantity=row["quantity"],
            unit=row["unit"],
            reorder_level=row["reorder_level"],
            price=parse_decimal(row["price"]),
            custom_data=load_json(row["custom_data_json"]),
            created_at=created_at,
            updated_at=parse_datetime(row["updated_at"]) or created_at,
        )

    @staticmethod
    def _row_to_transaction(row: aiosqlite.Row) -> Transaction:
        """Convert a database row to a Transaction entity."""
        return Transaction(
            id=row["id"],
            company_id=row["company_id"],
            inventory_item_id=row["inventory_item_id"],
            transaction_type=TransactionType(row["transaction_type"]),
            quantity=row["quantity"],
            reference_type=row["reference_type"],
            reference_id=row["reference_id"],
            notes=row["notes"],
            created_at=parse_datetime(row["created_at"]) or utcnow(),
        )
