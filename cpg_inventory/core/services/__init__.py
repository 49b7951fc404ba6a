"""
Core business logic services.

Layer-pure services that depend only on:
- cpg_inventory/core/entities/*
- cpg_inventory/core/interfaces/*
- cpg_inventory/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from cpg_inventory.core.services.adjustment_dispatcher import (
    MANUAL_ACTIONS,
    AdjustmentPlan,
    find_by_name,
    is_negative_action,
    plan_adjustment,
    plan_deductions,
    signed_delta,
)
from cpg_inventory.core.services.branding import BrandingConfig, hex_to_hsl_components
from cpg_inventory.core.services.custom_fields import validate_custom_data
from cpg_inventory.core.services.ledger import (
    LedgerConsistency,
    LedgerEntry,
    build_ledger,
    check_consistency,
    for_display,
    running_stock,
)
from cpg_inventory.core.services.numbering import (
    generate_order_number,
    generate_shipment_number,
)
from cpg_inventory.core.services.physical_stock import (
    PhysicalStock,
    physical_quantity,
    project_inventory,
)
from cpg_inventory.core.services.reports import ReportService

__all__ = [
    # Adjustment dispatcher
    "MANUAL_ACTIONS",
    "AdjustmentPlan",
    "find_by_name",
    "is_negative_action",
    "plan_adjustment",
    "plan_deductions",
    "signed_delta",
    # Ledger
    "LedgerConsistency",
    "LedgerEntry",
    "build_ledger",
    "check_consistency",
    "for_display",
    "running_stock",
    # Physical stock
    "PhysicalStock",
    "physical_quantity",
    "project_inventory",
    # Numbering
    "generate_order_number",
    "generate_shipment_number",
    # Branding / custom fields
    "BrandingConfig",
    "hex_to_hsl_components",
    "validate_custom_data",
    # Reports
    "ReportService",
]
