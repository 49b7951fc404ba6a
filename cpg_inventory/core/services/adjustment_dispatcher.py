"""
Adjustment dispatcher.

Maps a stock action to a signed quantity delta and validates it against
the item's current quantity. Pure functions only; persistence happens
in the use cases through the store's atomic adjustment.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from cpg_inventory.core.entities.inventory import (
    InventoryItem,
    Transaction,
    TransactionType,
    name_key,
)
from cpg_inventory.core.exceptions import InsufficientStockError, ValidationError

# Actions that remove stock from the shelf
NEGATIVE_ACTIONS: frozenset[TransactionType] = frozenset(
    {
        TransactionType.DAMAGED_GOODS,
        TransactionType.SAMPLE,
        TransactionType.CORRECTION,
        TransactionType.ORDER,
        TransactionType.SHIPMENT,
    }
)

POSITIVE_ACTIONS: frozenset[TransactionType] = frozenset(
    {
        TransactionType.RESTOCK,
        TransactionType.RETURNS,
    }
)

# Actions a user may pick on the adjustment form (order/shipment are system-generated)
MANUAL_ACTIONS: frozenset[TransactionType] = frozenset(
    {
        TransactionType.RESTOCK,
        TransactionType.RETURNS,
        TransactionType.DAMAGED_GOODS,
        TransactionType.SAMPLE,
        TransactionType.CORRECTION,
    }
)


@dataclass(frozen=True)
class AdjustmentPlan:
    """A validated stock change for one item."""

    item: InventoryItem
    action: TransactionType
    magnitude: int
    delta: int
    new_quantity: int

    @property
    def previous_quantity(self) -> int:
        return self.new_quantity - self.delta

    @property
    def is_noop(self) -> bool:
        return self.delta == 0

    def to_transaction(
        self,
        reference_type: str,
        notes: str | None = None,
        reference_id: int | None = None,
    ) -> Transaction:
        """Build the ledger row recording this plan."""
        return Transaction(
            company_id=self.item.company_id,
            inventory_item_id=self.item.id,  # type: ignore[arg-type]
            transaction_type=self.action,
            quantity=self.delta,
            reference_type=reference_type,
            reference_id=reference_id,
            notes=notes,
        )


def is_negative_action(action: TransactionType) -> bool:
    """True when the action takes stock away."""
    return action in NEGATIVE_ACTIONS


def signed_delta(action: TransactionType, magnitude: int) -> int:
    """Apply the action's sign convention to a non-negative magnitude."""
    if action == TransactionType.ADD_NEW:
        raise ValidationError(
            "action", "add_new creates an item and is not an adjustment", action.value
        )
    if action not in NEGATIVE_ACTIONS and action not in POSITIVE_ACTIONS:
        raise ValidationError("action", "Unsupported stock action", action.value)
    if magnitude < 0:
        raise ValidationError("quantity", "Quantity must not be negative", magnitude)
    return -magnitude if is_negative_action(action) else magnitude


def plan_adjustment(
    item: InventoryItem, action: TransactionType, magnitude: int
) -> AdjustmentPlan:
    """
    Validate a stock change against the item's current quantity.

    A zero magnitude yields a no-op plan that is still logged.

    Raises:
        InsufficientStockError: if the resulting quantity would be negative.
    """
    delta = signed_delta(action, magnitude)
    new_quantity = item.quantity + delta
    if new_quantity < 0:
        raise InsufficientStockError(
            item_name=item.name,
            requested=magnitude,
            available=item.quantity,
        )
    return AdjustmentPlan(
        item=item,
        action=action,
        magnitude=magnitude,
        delta=delta,
        new_quantity=new_quantity,
    )


def plan_deductions(
    lines: Iterable[tuple[InventoryItem, int]],
    action: TransactionType = TransactionType.ORDER,
) -> list[AdjustmentPlan]:
    """
    Plan one deduction per line, checking the combined demand per item.

    Two lines drawing on the same item are validated against their sum,
    so either every line fits or nothing is planned.
    """
    lines = list(lines)
    demand: dict[int, int] = {}
    by_id: dict[int, InventoryItem] = {}
    for item, quantity in lines:
        key = item.id  # type: ignore[assignment]
        demand[key] = demand.get(key, 0) + quantity
        by_id[key] = item

    for key, total in demand.items():
        item = by_id[key]
        if total > item.quantity:
            raise InsufficientStockError(
                item_name=item.name, requested=total, available=item.quantity
            )

    plans: list[AdjustmentPlan] = []
    running: dict[int, int] = {key: item.quantity for key, item in by_id.items()}
    for item, quantity in lines:
        delta = signed_delta(action, quantity)
        running[item.id] += delta  # type: ignore[index]
        plans.append(
            AdjustmentPlan(
                item=item,
                action=action,
                magnitude=quantity,
                delta=delta,
                new_quantity=running[item.id],  # type: ignore[index]
            )
        )
    return plans


def find_by_name(items: Iterable[InventoryItem], name: str) -> InventoryItem | None:
    """Case-insensitive name lookup."""
    wanted = name_key(name)
    for item in items:
        if name_key(item.name) == wanted:
            return item
    return None
