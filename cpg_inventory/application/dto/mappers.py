"""Entity to response DTO conversion shared by use cases and routes."""

from cpg_inventory.application.dto.responses import (
    CompanyResponse,
    CustomerResponse,
    CustomFieldResponse,
    InventoryItemResponse,
    LedgerEntryResponse,
    OrderItemResponse,
    OrderResponse,
    PhysicalStockResponse,
    ShipmentLineItemResponse,
    ShipmentResponse,
    TransactionResponse,
)
from cpg_inventory.core.entities import (
    Company,
    Customer,
    CustomField,
    InventoryItem,
    Order,
    Shipment,
    Transaction,
)
from cpg_inventory.core.services.ledger import LedgerEntry
from cpg_inventory.core.services.physical_stock import PhysicalStock


def item_to_response(item: InventoryItem) -> InventoryItemResponse:
    return InventoryItemResponse(
        id=item.id,  # type: ignore[arg-type]
        name=item.name,
        category=item.category.value,
        quantity=item.quantity,
        unit=item.unit,
        reorder_level=item.reorder_level,
        price=item.price,
        total_value=item.total_value,
        stock_status=item.stock_status.value,
        custom_data=item.custom_data,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def transaction_to_response(txn: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=txn.id,  # type: ignore[arg-type]
        inventory_item_id=txn.inventory_item_id,  # type: ignore[arg-type]
        transaction_type=txn.transaction_type.value,
        quantity=txn.quantity,
        reference_type=txn.reference_type,
        reference_id=txn.reference_id,
        notes=txn.notes,
        created_at=txn.created_at,
    )


def ledger_entry_to_response(entry: LedgerEntry) -> LedgerEntryResponse:
    txn = entry.transaction
    return LedgerEntryResponse(
        **transaction_to_response(txn).model_dump(),
        running_stock=entry.running_stock,
    )


def physical_stock_to_response(stock: PhysicalStock) -> PhysicalStockResponse:
    return PhysicalStockResponse(
        item_id=stock.item.id,  # type: ignore[arg-type]
        name=stock.item.name,
        unit=stock.item.unit,
        stored_quantity=stock.item.quantity,
        committed_quantity=stock.committed,
        physical_quantity=stock.physical_quantity,
    )


def order_to_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        customer_id=order.customer_id,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        recipient_name=order.recipient_name,
        recipient_email=order.recipient_email,
        recipient_phone=order.recipient_phone,
        shipping_address=order.shipping_address,
        status=order.status.value,
        needs_shipping=order.needs_shipping,
        total_amount=order.total_amount,
        custom_data=order.custom_data,
        items=[
            OrderItemResponse(
                id=item.id,  # type: ignore[arg-type]
                inventory_item_id=item.inventory_item_id,
                item_name=item.item_name,
                quantity=item.quantity,
                price=item.price,
                line_total=item.line_total,
            )
            for item in order.items
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def shipment_to_response(shipment: Shipment) -> ShipmentResponse:
    return ShipmentResponse(
        id=shipment.id,  # type: ignore[arg-type]
        shipment_number=shipment.shipment_number,
        order_id=shipment.order_id,
        shipment_type=shipment.shipment_type.value,
        recipient_name=shipment.recipient_name,
        recipient_email=shipment.recipient_email,
        recipient_phone=shipment.recipient_phone,
        shipping_address=shipment.shipping_address,
        scheduled_date=shipment.scheduled_date,
        shipped_date=shipment.shipped_date,
        tracking_number=shipment.tracking_number,
        carrier=shipment.carrier,
        status=shipment.status.value,
        notes=shipment.notes,
        stock_committed=shipment.stock_committed,
        items=[
            ShipmentLineItemResponse(
                id=line.id,  # type: ignore[arg-type]
                inventory_item_id=line.inventory_item_id,
                item_name=line.item_name,
                quantity=line.quantity,
            )
            for line in shipment.items
        ],
        created_at=shipment.created_at,
    )


def customer_to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,  # type: ignore[arg-type]
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        address=customer.address,
        created_at=customer.created_at,
    )


def company_to_response(company: Company) -> CompanyResponse:
    return CompanyResponse(
        id=company.id,  # type: ignore[arg-type]
        name=company.name,
        domain=company.domain,
        primary_color=company.primary_color,
        accent_color=company.accent_color,
        created_at=company.created_at,
    )


def custom_field_to_response(field: CustomField) -> CustomFieldResponse:
    return CustomFieldResponse(
        id=field.id,  # type: ignore[arg-type]
        table_name=field.table_name.value,
        field_name=field.field_name,
        field_type=field.field_type.value,
        field_order=field.field_order,
    )
