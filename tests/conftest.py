"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import stockledger.infrastructure.storage.sqlite.connection as conn_module
from stockledger.core.entities import Material, Project, Supplier
from stockledger.infrastructure.storage.sqlite import (
    SQLiteMaterialStore,
    SQLiteProjectStore,
    SQLiteSupplierStore,
    close_pool,
)
from stockledger.infrastructure.storage.sqlite.migrations.migrator import initialize_database

OWNER_ID = "user-owner"
OTHER_USER_ID = "user-other"
PROJECT_ID = "proj-1"


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
async def migrated_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Temporary database with all migrations applied and the pool pointed at it."""
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert results and all(r.success for r in results)

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await close_pool()


@pytest.fixture
async def project(migrated_db: Path) -> Project:
    """Project owned by OWNER_ID."""
    return await SQLiteProjectStore().create_project(
        Project(id=PROJECT_ID, name="Tower A", owner_user_id=OWNER_ID)
    )


@pytest.fixture
async def material(project: Project) -> Material:
    """Active material with zero stock in PROJECT_ID."""
    return await SQLiteMaterialStore().create_material(
        Material(
            project_id=project.id,
            name="Portland cement",
            unit="bag",
            min_level=Decimal("10"),
        )
    )


@pytest.fixture
async def supplier(migrated_db: Path) -> Supplier:
    """Registered supplier with id "sup-1"."""
    return await SQLiteSupplierStore().create_supplier(
        Supplier(id="sup-1", name="Acme Cement", ruc="20123456789")
    )
