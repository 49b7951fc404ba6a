"""
Physical-stock projector.

Stored quantities are already reduced when an order commits stock. The
physical count adds back every line of a still-scheduled shipment, giving
what is actually on the shelf even though part of it is earmarked.
Recomputed from the full shipment set on every call.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from cpg_inventory.core.entities.inventory import InventoryItem
from cpg_inventory.core.entities.shipment import Shipment, ShipmentLineItem, ShipmentStatus


@dataclass(frozen=True)
class PhysicalStock:
    """Stored and projected physical quantity for one item."""

    item: InventoryItem
    committed: int

    @property
    def physical_quantity(self) -> int:
        return self.item.quantity + self.committed


def line_matches(item: InventoryItem, line: ShipmentLineItem) -> bool:
    """Match by item id when the line carries one, else by name (legacy rows)."""
    if line.inventory_item_id is not None:
        return line.inventory_item_id == item.id
    return item.matches_name(line.item_name)


def committed_quantity(item: InventoryItem, shipments: Sequence[Shipment]) -> int:
    """Sum of matching line quantities across scheduled shipments."""
    total = 0
    for shipment in shipments:
        if shipment.status != ShipmentStatus.SCHEDULED:
            continue
        for line in shipment.items:
            if line_matches(item, line):
                total += line.quantity
    return total


def physical_quantity(item: InventoryItem, shipments: Sequence[Shipment]) -> int:
    return item.quantity + committed_quantity(item, shipments)


def project_inventory(
    items: Sequence[InventoryItem], shipments: Sequence[Shipment]
) -> list[PhysicalStock]:
    return [
        PhysicalStock(item=item, committed=committed_quantity(item, shipments))
        for item in items
    ]
