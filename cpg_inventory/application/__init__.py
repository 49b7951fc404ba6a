"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers that write stock.
"""

from cpg_inventory.application.services import get_report_service, reset_services
from cpg_inventory.application.use_cases import (
    AdjustStockUseCase,
    CreateOrderUseCase,
    CreateShipmentUseCase,
    UpdateItemUseCase,
    UpdateShipmentStatusUseCase,
)

__all__ = [
    # Use Cases
    "AdjustStockUseCase",
    "CreateOrderUseCase",
    "CreateShipmentUseCase",
    "UpdateItemUseCase",
    "UpdateShipmentStatusUseCase",
    # Service factories
    "get_report_service",
    "reset_services",
]
