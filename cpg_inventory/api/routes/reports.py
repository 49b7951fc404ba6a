"""
Dashboard and report endpoints.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from cpg_inventory.api.dependencies import get_company_id, get_reports
from cpg_inventory.application.dto.responses import (
    CustomerStatsResponse,
    DashboardResponse,
    InventoryStatsResponse,
    OrderStatsResponse,
    ShippingStatsResponse,
    StockValuationResponse,
)
from cpg_inventory.core.services import ReportService
from cpg_inventory.core.services.reports import OrderStats, StockValuation

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _valuation_response(valuation: StockValuation) -> StockValuationResponse:
    return StockValuationResponse(
        **asdict(valuation),
        overall_value=valuation.overall_value,
    )


def _order_stats_response(stats: OrderStats) -> OrderStatsResponse:
    return OrderStatsResponse(
        **asdict(stats),
        average_order_value=stats.average_order_value,
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    company_id: int = Depends(get_company_id),
    reports: ReportService = Depends(get_reports),
) -> DashboardResponse:
    """All dashboard statistics in one response."""
    return DashboardResponse(
        inventory=InventoryStatsResponse(**asdict(await reports.inventory_stats(company_id))),
        valuation=_valuation_response(await reports.stock_valuation(company_id)),
        orders=_order_stats_response(await reports.order_stats(company_id)),
        shipping=ShippingStatsResponse(**asdict(await reports.shipping_stats(company_id))),
        customers=CustomerStatsResponse(**asdict(await reports.customer_stats(company_id))),
    )


@router.get("/valuation", response_model=StockValuationResponse)
async def stock_valuation(
    company_id: int = Depends(get_company_id),
    reports: ReportService = Depends(get_reports),
) -> StockValuationResponse:
    """Stock value split by category."""
    return _valuation_response(await reports.stock_valuation(company_id))


@router.get("/inventory", response_model=InventoryStatsResponse)
async def inventory_stats(
    company_id: int = Depends(get_company_id),
    reports: ReportService = Depends(get_reports),
) -> InventoryStatsResponse:
    return InventoryStatsResponse(**asdict(await reports.inventory_stats(company_id)))


@router.get("/orders", response_model=OrderStatsResponse)
async def order_stats(
    company_id: int = Depends(get_company_id),
    reports: ReportService = Depends(get_reports),
) -> OrderStatsResponse:
    return _order_stats_response(await reports.order_stats(company_id))


@router.get("/shipping", response_model=ShippingStatsResponse)
async def shipping_stats(
    company_id: int = Depends(get_company_id),
    reports: ReportService = Depends(get_reports),
) -> ShippingStatsResponse:
    return ShippingStatsResponse(**asdict(await reports.shipping_stats(company_id)))


@router.get("/customers", response_model=CustomerStatsResponse)
async def customer_stats(
    company_id: int = Depends(get_company_id),
    reports: ReportService = Depends(get_reports),
) -> CustomerStatsResponse:
    return CustomerStatsResponse(**asdict(await reports.customer_stats(company_id)))
