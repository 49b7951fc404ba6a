"""SQLite implementation of shipment storage."""

import aiosqlite

from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.inventory import Transaction, utcnow
from cpg_inventory.core.entities.shipment import (
    Shipment,
    ShipmentLineItem,
    ShipmentStatus,
    ShipmentType,
)
from cpg_inventory.core.exceptions import (
    InvalidStatusTransitionError,
    ShipmentNotFoundError,
)
from cpg_inventory.core.interfaces.shipment_store import IShipmentStore
from cpg_inventory.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from cpg_inventory.infrastructure.storage.sqlite.ledger_writes import (
    apply_stock_delta,
    parse_datetime,
)

logger = get_logger(__name__)


async def insert_shipment(conn: aiosqlite.Connection, shipment: Shipment) -> Shipment:
    """Insert a shipment and its line items on an open transaction."""
    now = utcnow()
    shipment.created_at = now
    shipment.updated_at = now
    cursor = await conn.execute(
        """
        INSERT INTO shipments (
            company_id, shipment_number, order_id, shipment_type,
            recipient_name, recipient_email, recipient_phone, shipping_address,
            scheduled_date, shipped_date, tracking_number, carrier,
            status, notes, stock_committed, created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            shipment.company_id,
            shipment.shipment_number,
            shipment.order_id,
            shipment.shipment_type.value,
            shipment.recipient_name,
            shipment.recipient_email,
            shipment.recipient_phone,
            shipment.shipping_address,
            shipment.scheduled_date.isoformat(),
            shipment.shipped_date.isoformat() if shipment.shipped_date else None,
            shipment.tracking_number,
            shipment.carrier,
            shipment.status.value,
            shipment.notes,
            int(shipment.stock_committed),
            shipment.created_at.isoformat(),
            shipment.updated_at.isoformat(),
        ),
    )
    shipment.id = cursor.lastrowid

    for line in shipment.items:
        line.shipment_id = shipment.id
        line_cursor = await conn.execute(
            """
            INSERT INTO shipment_items (
                shipment_id, inventory_item_id, item_name, quantity
            ) VALUES (?, ?, ?, ?)
            """,
            (line.shipment_id, line.inventory_item_id, line.item_name, line.quantity),
        )
        line.id = line_cursor.lastrowid

    return shipment


class SQLiteShipmentStore(IShipmentStore):
    """SQLite implementation of shipment storage."""

    async def create_shipment(self, shipment: Shipment) -> Shipment:
        """Create a shipment with its line items."""
        async with get_transaction("create_shipment") as conn:
            await insert_shipment(conn, shipment)
            logger.info(
                "shipment_created",
                shipment_id=shipment.id,
                order_id=shipment.order_id,
                items=len(shipment.items),
            )
            return shipment

    async def get_shipment(self, company_id: int, shipment_id: int) -> Shipment | None:
        """Get shipment with line items."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM shipments WHERE id = ? AND company_id = ?",
                (shipment_id, company_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            shipments = await self._with_items(conn, [row])
            return shipments[0]

    async def list_shipments(
        self,
        company_id: int,
        status: ShipmentStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Shipment]:
        """List shipments, latest scheduled date first."""
        conditions = ["company_id = ?"]
        params: list = [company_id]
        if status is not None:
            conditions.append("status = ?")
            params.append(status.value)
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM shipments
                WHERE {" AND ".join(conditions)}
                ORDER BY scheduled_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return await self._with_items(conn, rows)

    async def list_for_order(self, company_id: int, order_id: int) -> list[Shipment]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM shipments
                WHERE company_id = ? AND order_id = ?
                ORDER BY scheduled_date DESC, id DESC
                """,
                (company_id, order_id),
            )
            rows = await cursor.fetchall()
            return await self._with_items(conn, rows)

    async def update_status(
        self,
        shipment: Shipment,
        transactions: list[Transaction],
        expected_status: ShipmentStatus,
        expected_committed: bool,
    ) -> Shipment:
        """
        Write the new status, then deduct stock for the given transactions.

        The UPDATE is guarded on the status and stock_committed values the
        caller read, so two racing status changes cannot both deduct.
        """
        shipment.updated_at = utcnow()
        async with get_transaction("update_shipment_status") as conn:
            cursor = await conn.execute(
                """
                UPDATE shipments SET
                    status = ?,
                    shipped_date = ?,
                    stock_committed = ?,
                    updated_at = ?
                WHERE id = ? AND company_id = ?
                  AND status = ? AND stock_committed = ?
                """,
                (
                    shipment.status.value,
                    shipment.shipped_date.isoformat() if shipment.shipped_date else None,
                    int(shipment.stock_committed),
                    shipment.updated_at.isoformat(),
                    shipment.id,
                    shipment.company_id,
                    expected_status.value,
                    int(expected_committed),
                ),
            )
            if cursor.rowcount == 0:
                cursor = await conn.execute(
                    "SELECT status FROM shipments WHERE id = ? AND company_id = ?",
                    (shipment.id, shipment.company_id),
                )
                row = await cursor.fetchone()
                if row is None:
                    raise ShipmentNotFoundError(shipment.id)  # type: ignore[arg-type]
                logger.warning(
                    "shipment_status_conflict",
                    shipment_id=shipment.id,
                    expected=expected_status.value,
                    stored=row["status"],
                )
                raise InvalidStatusTransitionError(
                    "shipment", row["status"], shipment.status.value
                )

            for transaction in transactions:
                transaction.created_at = shipment.updated_at
                await apply_stock_delta(conn, transaction)

            logger.info(
                "shipment_status_updated",
                shipment_id=shipment.id,
                status=shipment.status.value,
                stock_transactions=len(transactions),
            )
            return shipment

    async def delete_shipment(self, company_id: int, shipment_id: int) -> bool:
        """Delete a shipment; line items cascade."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM shipments WHERE id = ? AND company_id = ?",
                (shipment_id, company_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("shipment_deleted", shipment_id=shipment_id)
            return deleted

    async def _with_items(
        self, conn: aiosqlite.Connection, rows: list[aiosqlite.Row]
    ) -> list[Shipment]:
        """Attach line items to shipment rows with one query."""
        if not rows:
            return []
        ids = [row["id"] for row in rows]
        placeholders = ", ".join("?" for _ in ids)
        cursor = await conn.execute(
            f"SELECT * FROM shipment_items WHERE shipment_id IN ({placeholders}) ORDER BY id",
            ids,
        )
        lines: dict[int, list[ShipmentLineItem]] = {}
        for line_row in await cursor.fetchall():
            lines.setdefault(line_row["shipment_id"], []).append(
                self._row_to_line_item(line_row)
            )
        return [self._row_to_shipment(row, lines.get(row["id"], [])) for row in rows]

    @staticmethod
    def _row_to_line_item(row: aiosqlite.Row) -> ShipmentLineItem:
        return ShipmentLineItem(
            id=row["id"],
            shipment_id=row["shipment_id"],
            inventory_item_id=row["inventory_item_id"],
            item_name=row["item_name"],
            quantity=row["quantity"],
        )

    @staticmethod
    def _row_to_shipment(
        row: aiosqlite.Row, items: list[ShipmentLineItem]
    ) -> Shipment:
        """Convert a database row to a Shipment entity."""
        created_at = parse_datetime(row["created_at"]) or utcnow()
        return Shipment(
            id=row["id"],
            company_id=row["company_id"],
            shipment_number=row["shipment_number"],
            order_id=row["order_id"],
            shipment_type=ShipmentType(row["shipment_type"]),
            recipient_name=row["recipient_name"],
            recipient_email=row["recipient_email"],
            recipient_phone=row["recipient_phone"],
            shipping_address=row["shipping_address"],
            scheduled_date=parse_datetime(row["scheduled_date"]) or created_at,
            shipped_date=parse_datetime(row["shipped_date"]),
            tracking_number=row["tracking_number"],
            carrier=row["carrier"],
            status=ShipmentStatus(row["status"]),
            notes=row["notes"],
            stock_committed=bool(row["stock_committed"]),
            items=items,
            created_at=created_at,
            updated_at=parse_datetime(row["updated_at"]) or created_at,
        )
