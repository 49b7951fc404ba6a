"""Human-readable order and shipment numbers."""

from datetime import datetime

from cpg_inventory.core.entities.inventory import utcnow


def _epoch_millis(now: datetime | None) -> int:
    return int((now or utcnow()).timestamp() * 1000)


def generate_order_number(prefix: str = "ORD-", now: datetime | None = None) -> str:
    """Prefix plus the last six digits of the millisecond timestamp."""
    return f"{prefix}{str(_epoch_millis(now))[-6:]}"


def generate_shipment_number(prefix: str = "SHP-", now: datetime | None = None) -> str:
    """Prefix plus the full millisecond timestamp."""
    return f"{prefix}{_epoch_millis(now)}"
