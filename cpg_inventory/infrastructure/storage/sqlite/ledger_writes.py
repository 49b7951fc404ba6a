"""
Stock writes shared by every store that moves inventory.

All functions take an open transaction connection; the caller's
``get_transaction()`` block decides what commits together.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import aiosqlite

from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.inventory import Transaction, utcnow
from cpg_inventory.core.exceptions import (
    InsufficientStockError,
    InventoryItemNotFoundError,
)

logger = get_logger(__name__)


def parse_datetime(value: str | None) -> datetime | None:
    """Parse a stored ISO timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_decimal(value: str | None) -> Decimal:
    if value is None:
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


def load_json(value: str | None) -> dict[str, Any]:
    if not value:
        return {}
    try:
        data = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return {}
    return data if isinstance(data, dict) else {}


async def insert_transaction(
    conn: aiosqlite.Connection, transaction: Transaction
) -> Transaction:
    """Append one ledger row."""
    cursor = await conn.execute(
        """
        INSERT INTO inventory_transactions (
            company_id, inventory_item_id, transaction_type, quantity,
            reference_type, reference_id, notes, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            transaction.company_id,
            transaction.inventory_item_id,
            transaction.transaction_type.value,
            transaction.quantity,
            transaction.reference_type,
            transaction.reference_id,
            transaction.notes,
            transaction.created_at.isoformat(),
        ),
    )
    transaction.id = cursor.lastrowid
    return transaction


async def apply_stock_delta(
    conn: aiosqlite.Connection, transaction: Transaction
) -> int:
    """
    Add transaction.quantity to the item and record the transaction.

    The update is conditional on the result staying non-negative, so a
    concurrent decrement can never drive stock below zero.

    Returns:
        The item's new quantity

    Raises:
        InventoryItemNotFoundError: the item does not exist for the company
        InsufficientStockError: the delta would make the quantity negative
    """
    cursor = await conn.execute(
        """
        UPDATE inventory_items
        SET quantity = quantity + ?, updated_at = ?
        WHERE id = ? AND company_id = ? AND quantity + ? >= 0
        """,
        (
            transaction.quantity,
            utcnow().isoformat(),
            transaction.inventory_item_id,
            transaction.company_id,
            transaction.quantity,
        ),
    )
    if cursor.rowcount == 0:
        cursor = await conn.execute(
            "SELECT name, quantity FROM inventory_items WHERE id = ? AND company_id = ?",
            (transaction.inventory_item_id, transaction.company_id),
        )
        row = await cursor.fetchone()
        if row is None:
            raise InventoryItemNotFoundError(transaction.inventory_item_id)
        logger.warning(
            "stock_update_rejected",
            item_id=transaction.inventory_item_id,
            delta=transaction.quantity,
            available=row["quantity"],
        )
        raise InsufficientStockError(
            item_name=row["name"],
            requested=-transaction.quantity,
            available=row["quantity"],
        )

    await insert_transaction(conn, transaction)

    cursor = await conn.execute(
        "SELECT quantity FROM inventory_items WHERE id = ?",
        (transaction.inventory_item_id,),
    )
    row = await cursor.fetchone()
    return row["quantity"]
