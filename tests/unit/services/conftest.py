"""Fixtures for core service tests.

Stores are mocked; nothing here touches SQLite.
"""

from contextlib import asynccontextmanager
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from stockledger.core.entities import Material, Transaction

PROJECT_ID = "proj-1"
OWNER_ID = "user-owner"
MATERIAL_ID = "mat-1"


class FakeStockUnit:
    """In-memory unit of work recording what the ledger wrote."""

    def __init__(self, material: Material | None):
        self.material = material
        self.appended: list[Transaction] = []
        self.stock_writes: list[Decimal] = []

    async def append(self, transaction: Transaction) -> Transaction:
        transaction.id = len(self.appended) + 1
        self.appended.append(transaction)
        return transaction

    async def set_stock(self, new_stock: Decimal) -> None:
        self.stock_writes.append(new_stock)
        self.material.stock = new_stock  # type: ignore[union-attr]
        self.material.version += 1  # type: ignore[union-attr]


@pytest.fixture
def sample_material() -> Material:
    return Material(
        id=MATERIAL_ID,
        project_id=PROJECT_ID,
        name="Rebar 12mm",
        unit="kg",
        stock=Decimal("100.000"),
        min_level=Decimal("20.000"),
    )


@pytest.fixture
def stock_unit(sample_material: Material) -> FakeStockUnit:
    # The unit sees its own copy, like a fresh read under the write lock
    return FakeStockUnit(sample_material.model_copy())


@pytest.fixture
def mock_transaction_store(stock_unit: FakeStockUnit):
    store = MagicMock()

    @asynccontextmanager
    async def unit_of_work(material_id: str):
        yield stock_unit

    store.stock_unit_of_work = MagicMock(side_effect=unit_of_work)
    store.get_stock = AsyncMock(return_value=Decimal("100.000"))
    store.count_transactions = AsyncMock(return_value=0)
    store.list_transactions = AsyncMock(return_value=[])
    return store


@pytest.fixture
def mock_material_store(sample_material: Material):
    store = AsyncMock()
    store.get_material.return_value = sample_material
    store.list_by_project.return_value = [sample_material]
    store.list_low_stock.return_value = []
    return store


@pytest.fixture
def mock_authorization():
    auth = AsyncMock()
    auth.is_project_owner.return_value = True
    return auth
