"""Application use cases."""

from cpg_inventory.application.use_cases.adjust_stock import (
    AdjustStockResult,
    AdjustStockUseCase,
)
from cpg_inventory.application.use_cases.create_order import (
    CreateOrderResult,
    CreateOrderUseCase,
)
from cpg_inventory.application.use_cases.create_shipment import CreateShipmentUseCase
from cpg_inventory.application.use_cases.update_item import UpdateItemUseCase
from cpg_inventory.application.use_cases.update_shipment_status import (
    UpdateShipmentStatusResult,
    UpdateShipmentStatusUseCase,
)

__all__ = [
    "AdjustStockResult",
    "AdjustStockUseCase",
    "CreateOrderResult",
    "CreateOrderUseCase",
    "CreateShipmentUseCase",
    "UpdateItemUseCase",
    "UpdateShipmentStatusResult",
    "UpdateShipmentStatusUseCase",
]
