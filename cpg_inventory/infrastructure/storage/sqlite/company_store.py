"""SQLite implementation of company, branding and custom field storage."""

import aiosqlite

from cpg_inventory.config import get_logger
from cpg_inventory.core.entities.company import (
    Company,
    CustomField,
    CustomFieldTable,
    CustomFieldType,
)
from cpg_inventory.core.entities.inventory import utcnow
from cpg_inventory.core.exceptions import DuplicateCustomFieldError
from cpg_inventory.core.interfaces.company_store import ICompanyStore
from cpg_inventory.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from cpg_inventory.infrastructure.storage.sqlite.ledger_writes import parse_datetime

logger = get_logger(__name__)


class SQLiteCompanyStore(ICompanyStore):
    """SQLite implementation of company and custom field storage."""

    async def create_company(self, company: Company) -> Company:
        """Create a company."""
        company.created_at = utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO companies (
                    name, domain, primary_color, accent_color, created_at
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    company.name,
                    company.domain,
                    company.primary_color,
                    company.accent_color,
                    company.created_at.isoformat(),
                ),
            )
            company.id = cursor.lastrowid
            logger.info("company_created", company_id=company.id, domain=company.domain)
            return company

    async def get_company(self, company_id: int) -> Company | None:
        """Get company by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM companies WHERE id = ?", (company_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_company(row)

    async def update_branding(
        self, company_id: int, primary_color: str, accent_color: str
    ) -> Company | None:
        """Store new branding colors."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE companies SET primary_color = ?, accent_color = ?
                WHERE id = ?
                """,
                (primary_color, accent_color, company_id),
            )
            if cursor.rowcount == 0:
                return None
            logger.info(
                "branding_updated",
                company_id=company_id,
                primary_color=primary_color,
                accent_color=accent_color,
            )
        return await self.get_company(company_id)

    async def create_custom_field(self, field: CustomField) -> CustomField:
        """Create a definition, appended after the table's existing fields."""
        field.created_at = utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                SELECT COUNT(*) FROM custom_fields
                WHERE company_id = ? AND table_name = ?
                """,
                (field.company_id, field.table_name.value),
            )
            field.field_order = (await cursor.fetchone())[0]
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO custom_fields (
                        company_id, table_name, field_name, field_type,
                        field_order, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        field.company_id,
                        field.table_name.value,
                        field.field_name,
                        field.field_type.value,
                        field.field_order,
                        field.created_at.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise DuplicateCustomFieldError(
                    field.table_name.value, field.field_name
                ) from e
            field.id = cursor.lastrowid
            logger.info(
                "custom_field_created",
                field_id=field.id,
                table=field.table_name.value,
                name=field.field_name,
            )
            return field

    async def list_custom_fields(
        self, company_id: int, table_name: CustomFieldTable
    ) -> list[CustomField]:
        """List definitions for a table, in display order."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM custom_fields
                WHERE company_id = ? AND table_name = ?
                ORDER BY field_order, id
                """,
                (company_id, table_name.value),
            )
            rows = await cursor.fetchall()
            return [self._row_to_custom_field(row) for row in rows]

    async def delete_custom_field(self, company_id: int, field_id: int) -> bool:
        """Delete a definition. Stored values for it are left in place."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM custom_fields WHERE id = ? AND company_id = ?",
                (field_id, company_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("custom_field_deleted", field_id=field_id)
            return deleted

    @staticmethod
    def _row_to_company(row: aiosqlite.Row) -> Company:
        return Company(
            id=row["id"],
            name=row["name"],
            domain=row["domain"],
            primary_color=row["primary_color"],
            accent_color=row["accent_color"],
            created_at=parse_datetime(row["created_at"]) or utcnow(),
        )

    @staticmethod
    def _row_to_custom_field(row: aiosqlite.Row) -> CustomField:
        return CustomField(
            id=row["id"],
            company_id=row["company_id"],
            table_name=CustomFieldTable(row["table_name"]),
            field_name=row["field_name"],
            field_type=CustomFieldType(row["field_type"]),
            field_order=row["field_order"],
            created_at=parse_datetime(row["created_at"]) or utcnow(),
        )
