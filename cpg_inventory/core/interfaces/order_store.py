"""Abstract interface for order storage."""

from abc import ABC, abstractmethod

from cpg_inventory.core.entities.inventory import Transaction
from cpg_inventory.core.entities.order import Order, OrderStatus
from cpg_inventory.core.entities.shipment import Shipment


class IOrderStore(ABC):
    """Interface for order persistence."""

    @abstractmethod
    async def create_order(
        self,
        order: Order,
        transactions: list[Transaction],
        shipment: Shipment | None = None,
    ) -> tuple[Order, Shipment | None]:
        """Persist an order with its stock deductions and optional shipment.

        Runs as one unit of work: the order, its items, every conditional
        stock decrement, every ledger transaction and the shipment are
        committed together or not at all. Transaction and shipment
        reference ids are filled in with the new order id.
        """
        pass

    @abstractmethod
    async def get_order(self, company_id: int, order_id: int) -> Order | None:
        """Get order with items by ID."""
        pass

    @abstractmethod
    async def list_orders(
        self,
        company_id: int,
        status: OrderStatus | None = None,
        customer_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Order]:
        """List orders with items, newest first."""
        pass

    @abstractmethod
    async def update_status(
        self, company_id: int, order_id: int, status: OrderStatus
    ) -> Order | None:
        """Set order status. Returns None if the order does not exist."""
        pass

    @abstractmethod
    async def delete_order(self, company_id: int, order_id: int) -> bool:
        """Delete an order and its items."""
        pass
