"""Customer domain entity."""

from datetime import datetime

from pydantic import BaseModel, Field

from cpg_inventory.core.entities.inventory import utcnow


class Customer(BaseModel):
    """A company's customer; orders may reference it."""

    id: int | None = None
    company_id: int
    name: str = Field(min_length=1)
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
