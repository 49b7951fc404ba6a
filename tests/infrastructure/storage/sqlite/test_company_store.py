"""Tests for SQLiteCompanyStore."""

import pytest

from cpg_inventory.core.entities.company import (
    Company,
    CustomField,
    CustomFieldTable,
    CustomFieldType,
)
from cpg_inventory.core.exceptions import DuplicateCustomFieldError
from cpg_inventory.infrastructure.storage.sqlite.company_store import SQLiteCompanyStore


@pytest.fixture
def store() -> SQLiteCompanyStore:
    return SQLiteCompanyStore()


def _field(name: str, table=CustomFieldTable.INVENTORY_ITEMS, company_id: int = 1) -> CustomField:
    return CustomField(
        company_id=company_id,
        table_name=table,
        field_name=name,
        field_type=CustomFieldType.TEXT,
    )


class TestCompanies:
    async def test_create_uses_default_colors(self, db, store):
        company = await store.create_company(Company(name="Bakery", domain="bakery.test"))

        fetched = await store.get_company(company.id)
        assert fetched.name == "Bakery"
        assert fetched.primary_color == "#800000"
        assert fetched.accent_color == "#D3AF37"

    async def test_get_missing(self, db, store):
        assert await store.get_company(404) is None

    async def test_update_branding(self, db, store):
        updated = await store.update_branding(1, "#112233", "#abc")
        assert updated.primary_color == "#112233"
        assert updated.accent_color == "#abc"

    async def test_update_branding_missing(self, db, store):
        assert await store.update_branding(404, "#112233", "#445566") is None


class TestCustomFields:
    async def test_fields_appended_in_order(self, db, store):
        first = await store.create_custom_field(_field("supplier"))
        second = await store.create_custom_field(_field("origin"))
        other_table = await store.create_custom_field(_field("po_number", CustomFieldTable.ORDERS))

        assert (first.field_order, second.field_order) == (0, 1)
        assert other_table.field_order == 0

        listed = await store.list_custom_fields(1, CustomFieldTable.INVENTORY_ITEMS)
        assert [f.field_name for f in listed] == ["supplier", "origin"]
        assert await store.list_custom_fields(2, CustomFieldTable.INVENTORY_ITEMS) == []

    async def test_duplicate_name_rejected(self, db, store):
        await store.create_custom_field(_field("supplier"))
        with pytest.raises(DuplicateCustomFieldError):
            await store.create_custom_field(_field("supplier"))

    async def test_same_name_on_other_company(self, db, store):
        await store.create_custom_field(_field("supplier"))
        field = await store.create_custom_field(_field("supplier", company_id=2))
        assert field.id is not None

    async def test_delete(self, db, store):
        field = await store.create_custom_field(_field("supplier"))
        assert await store.delete_custom_field(2, field.id) is False
        assert await store.delete_custom_field(1, field.id) is True
        assert await store.list_custom_fields(1, CustomFieldTable.INVENTORY_ITEMS) == []
