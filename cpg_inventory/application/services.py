"""
Service factory functions for dependency injection.

This module wires the SQLite store implementations to core services.
Use cases and API handlers import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from cpg_inventory.core.services import ReportService

if TYPE_CHECKING:
    from cpg_inventory.core.interfaces import (
        ICustomerStore,
        IInventoryStore,
        IOrderStore,
        IShipmentStore,
    )


# Singleton service instances
_report_service: ReportService | None = None


async def get_report_service(
    inventory_store: "IInventoryStore | None" = None,
    order_store: "IOrderStore | None" = None,
    shipment_store: "IShipmentStore | None" = None,
    customer_store: "ICustomerStore | None" = None,
) -> ReportService:
    """
    Get or create ReportService instance.

    Creates infrastructure dependencies if not provided. Overrides
    produce a fresh, uncached instance.

    Returns:
        Configured ReportService
    """
    global _report_service

    overridden = any(
        s is not None for s in (inventory_store, order_store, shipment_store, customer_store)
    )
    if _report_service is not None and not overridden:
        return _report_service

    # Lazy import infrastructure
    from cpg_inventory.infrastructure.storage.sqlite import (
        get_customer_store,
        get_inventory_store,
        get_order_store,
        get_shipment_store,
    )

    service = ReportService(
        inventory_store=inventory_store or await get_inventory_store(),
        order_store=order_store or await get_order_store(),
        shipment_store=shipment_store or await get_shipment_store(),
        customer_store=customer_store or await get_customer_store(),
    )

    if not overridden:
        _report_service = service

    return service


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _report_service

    _report_service = None


__all__ = [
    "get_report_service",
    "reset_services",
]
