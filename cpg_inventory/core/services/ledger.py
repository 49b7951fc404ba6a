"""
Ledger reducer.

Turns an item's transaction history into running stock levels. The
running sum is always computed oldest-first starting from zero; the
newest-first order used for display is applied afterwards and never
changes the values.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from cpg_inventory.core.entities.inventory import InventoryItem, Transaction


@dataclass(frozen=True)
class LedgerEntry:
    """A transaction paired with the stock level right after it."""

    transaction: Transaction
    running_stock: int


@dataclass(frozen=True)
class LedgerConsistency:
    """Comparison of the replayed ledger with the stored quantity."""

    item_id: int | None
    stored_quantity: int
    ledger_quantity: int
    transaction_count: int

    @property
    def drift(self) -> int:
        return self.stored_quantity - self.ledger_quantity

    @property
    def is_consistent(self) -> bool:
        return self.drift == 0


def chronological(transactions: Sequence[Transaction]) -> list[Transaction]:
    """Sort ascending by creation time, id breaking ties."""
    return sorted(transactions, key=lambda t: (t.created_at, t.id or 0))


def running_stock(transactions: Sequence[Transaction]) -> list[int]:
    """Running sum of quantities, in the order given."""
    levels: list[int] = []
    total = 0
    for txn in transactions:
        total += txn.quantity
        levels.append(total)
    return levels


def build_ledger(transactions: Sequence[Transaction]) -> list[LedgerEntry]:
    """Replay a history into chronological ledger entries."""
    ordered = chronological(transactions)
    return [
        LedgerEntry(transaction=txn, running_stock=level)
        for txn, level in zip(ordered, running_stock(ordered), strict=True)
    ]


def for_display(entries: Sequence[LedgerEntry]) -> list[LedgerEntry]:
    """Newest-first copy of already computed entries."""
    return list(reversed(entries))


def ledger_quantity(transactions: Sequence[Transaction]) -> int:
    return sum(t.quantity for t in transactions)


def check_consistency(
    item: InventoryItem, transactions: Sequence[Transaction]
) -> LedgerConsistency:
    """Compare the replayed ledger against the item's stored quantity."""
    return LedgerConsistency(
        item_id=item.id,
        stored_quantity=item.quantity,
        ledger_quantity=ledger_quantity(transactions),
        transaction_count=len(transactions),
    )
