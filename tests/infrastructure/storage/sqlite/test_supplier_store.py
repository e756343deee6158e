"""Tests for SQLite supplier store."""

import pytest

from stockledger.core.entities import Supplier
from stockledger.core.exceptions import DuplicateSupplierError
from stockledger.infrastructure.storage.sqlite import SQLiteSupplierStore


class TestSQLiteSupplierStore:
    async def test_create_and_get(self, migrated_db):
        store = SQLiteSupplierStore()

        created = await store.create_supplier(
            Supplier(name="Acme Steel", ruc="20123456789", email="sales@acme.pe")
        )
        fetched = await store.get_supplier(created.id)

        assert created.id
        assert fetched is not None
        assert fetched.name == "Acme Steel"
        assert fetched.ruc == "20123456789"
        assert fetched.phone is None
        assert fetched.email == "sales@acme.pe"
        assert fetched.created_at.tzinfo is not None

    async def test_get_missing(self, migrated_db):
        assert await SQLiteSupplierStore().get_supplier("missing") is None

    async def test_duplicate_ruc(self, migrated_db):
        store = SQLiteSupplierStore()
        await store.create_supplier(Supplier(name="Acme", ruc="20123456789"))

        with pytest.raises(DuplicateSupplierError):
            await store.create_supplier(Supplier(name="Acme again", ruc="20123456789"))

    async def test_ruc_is_optional_for_many(self, migrated_db):
        store = SQLiteSupplierStore()
        await store.create_supplier(Supplier(name="Local yard"))
        await store.create_supplier(Supplier(name="Corner shop"))

        names = [s.name for s in await store.list_suppliers()]
        assert names == ["Corner shop", "Local yard"]

    async def test_update(self, supplier: Supplier):
        store = SQLiteSupplierStore()

        updated = await store.update_supplier(
            supplier.model_copy(update={"phone": "+51 1 555 0100", "ruc": None})
        )
        fetched = await store.get_supplier(supplier.id)

        assert updated is not None
        assert fetched.phone == "+51 1 555 0100"
        assert fetched.ruc is None
        assert fetched.name == "Acme Cement"

    async def test_update_to_taken_ruc(self, supplier: Supplier):
        store = SQLiteSupplierStore()
        other = await store.create_supplier(Supplier(name="Other", ruc="20999999999"))

        with pytest.raises(DuplicateSupplierError):
            await store.update_supplier(other.model_copy(update={"ruc": supplier.ruc}))

    async def test_update_missing(self, migrated_db):
        ghost = Supplier(id="missing", name="Ghost")
        assert await SQLiteSupplierStore().update_supplier(ghost) is None
