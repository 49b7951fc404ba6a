"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from cpg_inventory.application.dto.requests import (
    AdjustStockRequest,
    CreateCompanyRequest,
    CreateCustomerRequest,
    CreateCustomFieldRequest,
    CreateOrderRequest,
    CreateShipmentRequest,
    OrderItemRequest,
    ShipmentItemRequest,
    UpdateBrandingRequest,
    UpdateCustomerRequest,
    UpdateItemRequest,
    UpdateOrderStatusRequest,
    UpdateShipmentStatusRequest,
)
from cpg_inventory.application.dto.responses import (
    AdjustStockResponse,
    BrandingResponse,
    CompanyResponse,
    ComponentHealthResponse,
    CreateOrderResponse,
    CustomerListResponse,
    CustomerOrderHistoryResponse,
    CustomerResponse,
    CustomerStatsResponse,
    CustomFieldListResponse,
    CustomFieldResponse,
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryStatsResponse,
    ItemHistoryResponse,
    LedgerEntryResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatsResponse,
    PhysicalStockResponse,
    ShipmentLineItemResponse,
    ShipmentListResponse,
    ShipmentResponse,
    ShippingStatsResponse,
    StockValuationResponse,
    TransactionResponse,
    UpdateShipmentStatusResponse,
)

__all__ = [
    # Requests
    "AdjustStockRequest",
    "CreateCompanyRequest",
    "CreateCustomerRequest",
    "CreateCustomFieldRequest",
    "CreateOrderRequest",
    "CreateShipmentRequest",
    "OrderItemRequest",
    "ShipmentItemRequest",
    "UpdateBrandingRequest",
    "UpdateCustomerRequest",
    "UpdateItemRequest",
    "UpdateOrderStatusRequest",
    "UpdateShipmentStatusRequest",
    # Responses
    "AdjustStockResponse",
    "BrandingResponse",
    "CompanyResponse",
    "ComponentHealthResponse",
    "CreateOrderResponse",
    "CustomerListResponse",
    "CustomerOrderHistoryResponse",
    "CustomerResponse",
    "CustomerStatsResponse",
    "CustomFieldListResponse",
    "CustomFieldResponse",
    "DashboardResponse",
    "ErrorResponse",
    "HealthResponse",
    "InventoryItemResponse",
    "InventoryListResponse",
    "InventoryStatsResponse",
    "ItemHistoryResponse",
    "LedgerEntryResponse",
    "OrderItemResponse",
    "OrderListResponse",
    "OrderResponse",
    "OrderStatsResponse",
    "PhysicalStockResponse",
    "ShipmentLineItemResponse",
    "ShipmentListResponse",
    "ShipmentResponse",
    "ShippingStatsResponse",
    "StockValuationResponse",
    "TransactionResponse",
    "UpdateShipmentStatusResponse",
]
