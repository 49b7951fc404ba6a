"""Abstract interface for customer storage."""

from abc import ABC, abstractmethod

from cpg_inventory.core.entities.customer import Customer


class ICustomerStore(ABC):
    """Interface for customer persistence."""

    @abstractmethod
    async def create_customer(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def get_customer(self, company_id: int, customer_id: int) -> Customer | None:
        pass

    @abstractmethod
    async def list_customers(
        self, company_id: int, limit: int = 100, offset: int = 0
    ) -> list[Customer]:
        """List customers ordered by name."""
        pass

    @abstractmethod
    async def update_customer(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def delete_customer(self, company_id: int, customer_id: int) -> bool:
        pass
