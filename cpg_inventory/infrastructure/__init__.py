"""Infrastructure layer implementations."""

from cpg_inventory.infrastructure import storage

__all__ = ["storage"]
