"""Abstract interface for shipment storage."""

from abc import ABC, abstractmethod

from cpg_inventory.core.entities.inventory import Transaction
from cpg_inventory.core.entities.shipment import Shipment, ShipmentStatus


class IShipmentStore(ABC):
    """Interface for shipment persistence."""

    @abstractmethod
    async def create_shipment(self, shipment: Shipment) -> Shipment:
        """Create a shipment with its line items."""
        pass

    @abstractmethod
    async def get_shipment(self, company_id: int, shipment_id: int) -> Shipment | None:
        """Get shipment with line items by ID."""
        pass

    @abstractmethod
    async def list_shipments(
        self,
        company_id: int,
        status: ShipmentStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Shipment]:
        """List shipments ordered by scheduled_date descending."""
        pass

    @abstractmethod
    async def update_status(
        self,
        shipment: Shipment,
        transactions: list[Transaction],
        expected_status: ShipmentStatus,
        expected_committed: bool,
    ) -> Shipment:
        """
        Write status and shipped_date, applying stock deductions atomically.

        The write only lands if the stored row still has the status and
        commitment flag the caller read; otherwise nothing is written and
        InvalidStatusTransitionError is raised.
        """
        pass

    @abstractmethod
    async def delete_shipment(self, company_id: int, shipment_id: int) -> bool:
        """Delete a shipment and its line items."""
        pass

    @abstractmethod
    async def list_for_order(self, company_id: int, order_id: int) -> list[Shipment]:
        """List shipments linked to an order."""
        pass
