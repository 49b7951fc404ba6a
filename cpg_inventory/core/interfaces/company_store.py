"""Abstract interface for company, branding and custom field storage."""

from abc import ABC, abstractmethod

from cpg_inventory.core.entities.company import Company, CustomField, CustomFieldTable


class ICompanyStore(ABC):
    """Interface for company and custom field definition persistence."""

    @abstractmethod
    async def create_company(self, company: Company) -> Company:
        """Create a company."""
        pass

    @abstractmethod
    async def get_company(self, company_id: int) -> Company | None:
        """Get company by ID."""
        pass

    @abstractmethod
    async def update_branding(
        self, company_id: int, primary_color: str, accent_color: str
    ) -> Company | None:
        """Store new branding colors."""
        pass

    @abstractmethod
    async def create_custom_field(self, field: CustomField) -> CustomField:
        """Create a custom field definition."""
        pass

    @abstractmethod
    async def list_custom_fields(
        self, company_id: int, table_name: CustomFieldTable
    ) -> list[CustomField]:
        """List definitions for a table ordered by field_order."""
        pass

    @abstractmethod
    async def delete_custom_field(self, company_id: int, field_id: int) -> bool:
        """Delete a custom field definition."""
        pass
