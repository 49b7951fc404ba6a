"""Fixtures for end-to-end tests against a real SQLite database."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

import cpg_inventory.infrastructure.storage.sqlite.connection as conn_module
import cpg_inventory.infrastructure.storage.sqlite.migrations.migrator as migrator_module
from cpg_inventory.api.main import app
from cpg_inventory.infrastructure.storage.sqlite.connection import close_pool


@pytest.fixture
async def client(tmp_path: Path) -> AsyncGenerator[AsyncClient, None]:
    """API client backed by a freshly migrated database."""
    mock_settings = MagicMock()
    mock_settings.storage.db_path = tmp_path / "inventory.db"
    mock_settings.storage.pool_size = 2
    mock_settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with (
        patch.object(migrator_module, "get_settings", return_value=mock_settings),
        patch.object(conn_module, "get_settings", return_value=mock_settings),
    ):
        await migrator_module.initialize_database(create_backup_before=False)
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            await close_pool()
