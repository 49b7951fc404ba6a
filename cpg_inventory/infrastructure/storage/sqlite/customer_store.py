"""SQLite implementation of customer storage."""

import aiosqlite

from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.customer import Customer
from cpg_inventory.core.entities.inventory import utcnow
from cpg_inventory.core.exceptions import CustomerNotFoundError
from cpg_inventory.core.interfaces.customer_store import ICustomerStore
from cpg_inventory.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from cpg_inventory.infrastructure.storage.sqlite.ledger_writes import parse_datetime

logger = get_logger(__name__)


class SQLiteCustomerStore(ICustomerStore):
    """SQLite implementation of customer storage."""

    async def create_customer(self, customer: Customer) -> Customer:
        customer.created_at = utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO customers (
                    company_id, name, email, phone, address, created_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    customer.company_id,
                    customer.name,
                    customer.email,
                    customer.phone,
                    customer.address,
                    customer.created_at.isoformat(),
                ),
            )
            customer.id = cursor.lastrowid
            logger.info("customer_created", customer_id=customer.id)
            return customer

    async def get_customer(self, company_id: int, customer_id: int) -> Customer | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM customers WHERE id = ? AND company_id = ?",
                (customer_id, company_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_customer(row)

    async def list_customers(
        self, company_id: int, limit: int = 100, offset: int = 0
    ) -> list[Customer]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM customers
                WHERE company_id = ?
                ORDER BY name COLLATE NOCASE, id
                LIMIT ? OFFSET ?
                """,
                (company_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_customer(row) for row in rows]

    async def update_customer(self, customer: Customer) -> Customer:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE customers SET name = ?, email = ?, phone = ?, address = ?
                WHERE id = ? AND company_id = ?
                """,
                (
                    customer.name,
                    customer.email,
                    customer.phone,
                    customer.address,
                    customer.id,
                    customer.company_id,
                ),
            )
            if cursor.rowcount == 0:
                raise CustomerNotFoundError(customer.id)  # type: ignore[arg-type]
            logger.info("customer_updated", customer_id=customer.id)
            return customer

    async def delete_customer(self, company_id: int, customer_id: int) -> bool:
        """Delete a customer; their orders keep the copied contact details."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM customers WHERE id = ? AND company_id = ?",
                (customer_id, company_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("customer_deleted", customer_id=customer_id)
            return deleted

    @staticmethod
    def _row_to_customer(row: aiosqlite.Row) -> Customer:
        return Customer(
            id=row["id"],
            company_id=row["company_id"],
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            address=row["address"],
            created_at=parse_datetime(row["created_at"]) or utcnow(),
        )
