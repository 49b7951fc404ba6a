"""API route modules."""

from cpg_inventory.api.routes.company import router as company_router
from cpg_inventory.api.routes.customers import router as customers_router
from cpg_inventory.api.routes.health import router as health_router
from cpg_inventory.api.routes.inventory import router as inventory_router
from cpg_inventory.api.routes.orders import router as orders_router
from cpg_inventory.api.routes.reports import router as reports_router
from cpg_inventory.api.routes.shipments import router as shipments_router

__all__ = [
    "health_router",
    "inventory_router",
    "orders_router",
    "shipments_router",
    "customers_router",
    "reports_router",
    "company_router",
]
