"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock, patch

import aiosqlite
import pytest

import cpg_inventory.infrastructure.storage.sqlite.connection as conn_module
import cpg_inventory.infrastructure.storage.sqlite.migrations.migrator as migrator_module
from cpg_inventory.core.entities.inventory import (
    InventoryItem,
    ItemCategory,
    Transaction,
    TransactionType,
)
from cpg_inventory.infrastructure.storage.sqlite.connection import close_pool


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def initialized_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated database with two companies."""
    with patch.object(migrator_module, "get_settings", return_value=mock_settings):
        await migrator_module.initialize_database(temp_db_path, create_backup_before=False)

    now = datetime.now(UTC).isoformat()
    async with aiosqlite.connect(temp_db_path) as conn:
        await conn.executemany(
            "INSERT INTO companies (id, name, domain, created_at) VALUES (?, ?, ?, ?)",
            [(1, "Acme Foods", "acme.test", now), (2, "Other Co", "other.test", now)],
        )
        await conn.commit()

    yield temp_db_path


@pytest.fixture
async def db(initialized_db: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Point the global connection pool at the migrated database."""
    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield initialized_db
        finally:
            await close_pool()


def make_item(
    name: str = "Flour",
    quantity: int = 100,
    company_id: int = 1,
    category: ItemCategory = ItemCategory.RAW,
    price: str = "1.50",
) -> tuple[InventoryItem, Transaction]:
    """Build an unsaved item and its opening transaction."""
    item = InventoryItem(
        company_id=company_id,
        name=name,
        category=category,
        quantity=quantity,
        unit="kg",
        reorder_level=10,
        price=Decimal(price),
    )
    txn = Transaction(
        company_id=company_id,
        transaction_type=TransactionType.ADD_NEW,
        quantity=quantity,
        reference_type="item_creation",
        notes="Initial stock",
    )
    return item, txn


@pytest.fixture
def new_item():
    """Factory for unsaved items with their opening transaction."""
    return make_item
