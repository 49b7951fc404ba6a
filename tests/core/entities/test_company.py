"""Tests for company and customer entities."""

import pytest
from pydantic import ValidationError

from cpg_inventory.core.entities.company import Company, CustomField, CustomFieldTable, CustomFieldType
from cpg_inventory.core.entities.customer import Customer


class TestCompany:
    def test_default_branding(self):
        company = Company(name="Acme", domain="acme.test")
        assert company.primary_color == "#800000"
        assert company.accent_color == "#D3AF37"

    def test_short_hex_accepted(self):
        company = Company(name="Acme", domain="acme.test", primary_color="#fff")
        assert company.primary_color == "#fff"

    @pytest.mark.parametrize("color", ["800000", "#80000", "#GGGGGG", "red"])
    def test_invalid_hex_rejected(self, color):
        with pytest.raises(ValidationError):
            Company(name="Acme", domain="acme.test", primary_color=color)


class TestCustomField:
    def test_defaults_to_text(self):
        field = CustomField(
            company_id=1, table_name=CustomFieldTable.ORDERS, field_name="po_number"
        )
        assert field.field_type == CustomFieldType.TEXT
        assert field.field_order == 0

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            CustomField(
                company_id=1, table_name=CustomFieldTable.ORDERS, field_name=""
            )


class TestCustomer:
    def test_optional_contact_fields(self):
        customer = Customer(company_id=1, name="Corner Store")
        assert customer.email is None
        assert customer.phone is None
        assert customer.address is None

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Customer(company_id=1, name="")
