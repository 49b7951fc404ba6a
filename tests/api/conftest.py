"""Fixtures shared by API tests."""

import pytest

from cpg_inventory.api.dependencies import get_company_id
from cpg_inventory.api.main import app


@pytest.fixture
def as_company():
    """Resolve every request to company 1 without touching the database."""
    app.dependency_overrides[get_company_id] = lambda: 1
    yield 1
    app.dependency_overrides.pop(get_company_id, None)
