"""SQLite implementation of order storage."""

import json

import aiosqlite

from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.inventory import Transaction, utcnow
from cpg_inventory.core.entities.order import Order, OrderItem, OrderStatus
from cpg_inventory.core.entities.shipment import Shipment
from cpg_inventory.core.exceptions import OrderHasShipmentsError
from cpg_inventory.core.interfaces.order_store import IOrderStore
from cpg_inventory.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from cpg_inventory.infrastructure.storage.sqlite.ledger_writes import (
    apply_stock_delta,
    load_json,
    parse_datetime,
    parse_decimal,
)
from cpg_inventory.infrastructure.storage.sqlite.shipment_store import insert_shipment

logger = get_logger(__name__)


class SQLiteOrderStore(IOrderStore):
    """SQLite implementation of order storage."""

    async def create_order(
        self,
        order: Order,
        transactions: list[Transaction],
        shipment: Shipment | None = None,
    ) -> tuple[Order, Shipment | None]:
        """
        Create an order, deduct its stock and schedule its shipment.

        Everything runs on one transaction; a failed decrement rolls back
        the order, its items and any ledger rows already written.
        """
        now = utcnow()
        order.created_at = now
        order.updated_at = now
        async with get_transaction("create_order") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO orders (
                    company_id, order_number, customer_id, customer_name,
                    customer_email, customer_phone, recipient_name,
                    recipient_email, recipient_phone, shipping_address,
                    status, needs_shipping, total_amount, custom_data_json,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order.company_id,
                    order.order_number,
                    order.customer_id,
                    order.customer_name,
                    order.customer_email,
                    order.customer_phone,
                    order.recipient_name,
                    order.recipient_email,
                    order.recipient_phone,
                    order.shipping_address,
                    order.status.value,
                    int(order.needs_shipping),
                    str(order.total_amount),
                    json.dumps(order.custom_data),
                    order.created_at.isoformat(),
                    order.updated_at.isoformat(),
                ),
            )
            order.id = cursor.lastrowid

            for item in order.items:
                item.order_id = order.id
                item_cursor = await conn.execute(
                    """
                    INSERT INTO order_items (
                        order_id, inventory_item_id, item_name, quantity, price
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        item.order_id,
                        item.inventory_item_id,
                        item.item_name,
                        item.quantity,
                        str(item.price),
                    ),
                )
                item.id = item_cursor.lastrowid

            for transaction in transactions:
                transaction.reference_id = order.id
                transaction.created_at = now
                await apply_stock_delta(conn, transaction)

            if shipment is not None:
                shipment.order_id = order.id
                await insert_shipment(conn, shipment)

            logger.info(
                "order_created",
                order_id=order.id,
                order_number=order.order_number,
                items=len(order.items),
                total=str(order.total_amount),
                shipment_id=shipment.id if shipment else None,
            )
            return order, shipment

    async def get_order(self, company_id: int, order_id: int) -> Order | None:
        """Get order with items."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM orders WHERE id = ? AND company_id = ?",
                (order_id, company_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            orders = await self._with_items(conn, [row])
            return orders[0]

    async def list_orders(
        self,
        company_id: int,
        status: OrderStatus | None = None,
        customer_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Order]:
        """List orders, newest first."""
        conditions = ["company_id = ?"]
        params: list = [company_id]
        if status is not None:
            conditions.append("status = ?")
            params.append(status.value)
        if customer_id is not None:
            conditions.append("customer_id = ?")
            params.append(customer_id)
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM orders
                WHERE {" AND ".join(conditions)}
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return await self._with_items(conn, rows)

    async def update_status(
        self, company_id: int, order_id: int, status: OrderStatus
    ) -> Order | None:
        """Set order status; stock is untouched."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE orders SET status = ?, updated_at = ?
                WHERE id = ? AND company_id = ?
                """,
                (status.value, utcnow().isoformat(), order_id, company_id),
            )
            if cursor.rowcount == 0:
                return None
            logger.info("order_status_updated", order_id=order_id, status=status.value)
        return await self.get_order(company_id, order_id)

    async def delete_order(self, company_id: int, order_id: int) -> bool:
        """Delete an order that no shipment references; items cascade."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM shipments WHERE company_id = ? AND order_id = ?",
                (company_id, order_id),
            )
            count = (await cursor.fetchone())[0]
            if count:
                raise OrderHasShipmentsError(order_id, count)

            cursor = await conn.execute(
                "DELETE FROM orders WHERE id = ? AND company_id = ?",
                (order_id, company_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("order_deleted", order_id=order_id)
            return deleted

    async def _with_items(
        self, conn: aiosqlite.Connection, rows: list[aiosqlite.Row]
    ) -> list[Order]:
        """Attach order items to order rows with one query."""
        if not rows:
            return []
        ids = [row["id"] for row in rows]
        placeholders = ", ".join("?" for _ in ids)
        cursor = await conn.execute(
            f"SELECT * FROM order_items WHERE order_id IN ({placeholders}) ORDER BY id",
            ids,
        )
        items: dict[int, list[OrderItem]] = {}
        for item_row in await cursor.fetchall():
            items.setdefault(item_row["order_id"], []).append(
                self._row_to_order_item(item_row)
            )
        return [self._row_to_order(row, items.get(row["id"], [])) for row in rows]

    @staticmethod
    def _row_to_order_item(row: aiosqlite.Row) -> OrderItem:
        return OrderItem(
            id=row["id"],
            order_id=row["order_id"],
            inventory_item_id=row["inventory_item_id"],
            item_name=row["item_name"],
            quantity=row["quantity"],
            price=parse_decimal(row["price"]),
        )

    @staticmethod
    def _row_to_order(row: aiosqlite.Row, items: list[OrderItem]) -> Order:
        """Convert a database row to an Order entity."""
        created_at = parse_datetime(row["created_at"]) or utcnow()
        return Order(
            id=row["id"],
            company_id=row["company_id"],
            order_number=row["order_number"],
            customer_id=row["customer_id"],
            customer_name=row["customer_name"],
            customer_email=row["customer_email"],
            customer_phone=row["customer_phone"] or "",
            recipient_name=row["recipient_name"],
            recipient_email=row["recipient_email"],
            recipient_phone=row["recipient_phone"],
            shipping_address=row["shipping_address"],
            status=OrderStatus(row["status"]),
            needs_shipping=bool(row["needs_shipping"]),
            total_amount=parse_decimal(row["total_amount"]),
            custom_data=load_json(row["custom_data_json"]),
            items=items,
            created_at=created_at,
            updated_at=parse_datetime(row["updated_at"]) or created_at,
        )
