"""
Dependency injection container for FastAPI.

Provides stores, use cases, services and the calling company to route
handlers. Every tenant-scoped route depends on ``get_company_id``.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status

from cpg_inventory.application.services import get_report_service
from cpg_inventory.application.use_cases import (
    AdjustStockUseCase,
    CreateOrderUseCase,
    CreateShipmentUseCase,
    UpdateItemUseCase,
    UpdateShipmentStatusUseCase,
)
from cpg_inventory.config import Settings, get_settings
from cpg_inventory.core.entities.company import Company
from cpg_inventory.core.exceptions import CompanyNotFoundError
from cpg_inventory.core.services import BrandingConfig, ReportService
from cpg_inventory.infrastructure.storage.sqlite import (
    SQLiteCompanyStore,
    SQLiteCustomerStore,
    SQLiteInventoryStore,
    SQLiteOrderStore,
    SQLiteShipmentStore,
    get_company_store,
    get_customer_store,
    get_inventory_store,
    get_order_store,
    get_shipment_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_inv_item_store() -> SQLiteInventoryStore:
    """Get inventory item store."""
    return await get_inventory_store()


async def get_ord_store() -> SQLiteOrderStore:
    """Get order store."""
    return await get_order_store()


async def get_ship_store() -> SQLiteShipmentStore:
    """Get shipment store."""
    return await get_shipment_store()


async def get_cust_store() -> SQLiteCustomerStore:
    """Get customer store."""
    return await get_customer_store()


async def get_comp_store() -> SQLiteCompanyStore:
    """Get company store."""
    return await get_company_store()


# Tenant
async def get_company(
    request: Request,
    store: SQLiteCompanyStore = Depends(get_comp_store),
) -> Company:
    """Resolve the calling company from the company header."""
    header = get_settings().api.company_header
    raw = request.headers.get(header)
    if raw is None or not raw.strip().isdigit():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing or invalid {header} company header",
        )
    company_id = int(raw)
    company = await store.get_company(company_id)
    if company is None:
        raise CompanyNotFoundError(company_id)
    return company


async def get_company_id(company: Company = Depends(get_company)) -> int:
    """ID of the calling company."""
    return company.id  # type: ignore[return-value]


def get_branding(company: Company = Depends(get_company)) -> BrandingConfig:
    """Branding for the calling company, built fresh per request."""
    return BrandingConfig.from_company(company)


# Services
async def get_reports() -> ReportService:
    """Get report service."""
    return await get_report_service()


# Use case dependencies
def get_adjust_stock_use_case() -> AdjustStockUseCase:
    """Get adjust stock use case."""
    return AdjustStockUseCase()


def get_update_item_use_case() -> UpdateItemUseCase:
    """Get update item use case."""
    return UpdateItemUseCase()


def get_create_order_use_case() -> CreateOrderUseCase:
    """Get create order use case."""
    return CreateOrderUseCase()


def get_create_shipment_use_case() -> CreateShipmentUseCase:
    """Get create shipment use case."""
    return CreateShipmentUseCase()


def get_update_shipment_status_use_case() -> UpdateShipmentStatusUseCase:
    """Get update shipment status use case."""
    return UpdateShipmentStatusUseCase()
