"""Tests for SupplierCatalog."""

from unittest.mock import AsyncMock

import pytest

from stockledger.core.entities import Supplier
from stockledger.core.exceptions import (
    DuplicateSupplierError,
    InvalidInputError,
    SupplierNotFoundError,
)
from stockledger.core.services import SupplierCatalog


@pytest.fixture
def acme() -> Supplier:
    return Supplier(id="sup-1", name="Acme Steel", ruc="20123456789", phone="555-0100")


@pytest.fixture
def mock_supplier_store(acme: Supplier):
    store = AsyncMock()
    store.create_supplier.side_effect = lambda s: s.model_copy(update={"id": "sup-new"})
    store.get_supplier.return_value = acme
    store.list_suppliers.return_value = [acme]
    store.update_supplier.side_effect = lambda s: s
    return store


@pytest.fixture
def catalog(mock_supplier_store) -> SupplierCatalog:
    return SupplierCatalog(mock_supplier_store)


class TestCreateSupplier:
    async def test_strips_and_drops_blank_fields(self, catalog):
        supplier = await catalog.create_supplier(
            "  Acme Steel ", ruc=" 20123456789 ", phone="   ", email=None
        )

        assert supplier.id == "sup-new"
        assert supplier.name == "Acme Steel"
        assert supplier.ruc == "20123456789"
        assert supplier.phone is None
        assert supplier.email is None

    @pytest.mark.parametrize(
        "kwargs,field",
        [
            ({"name": ""}, "name"),
            ({"name": "n" * 161}, "name"),
            ({"name": "Acme", "ruc": "1" * 21}, "ruc"),
            ({"name": "Acme", "phone": "5" * 33}, "phone"),
            ({"name": "Acme", "email": "a" * 150 + "@example.com"}, "email"),
            ({"name": "Acme", "email": "not-an-email"}, "email"),
        ],
    )
    async def test_invalid_fields(self, catalog, mock_supplier_store, kwargs, field):
        with pytest.raises(InvalidInputError) as exc_info:
            await catalog.create_supplier(**kwargs)

        assert exc_info.value.details["field"] == field
        mock_supplier_store.create_supplier.assert_not_awaited()

    async def test_limits_are_inclusive(self, catalog):
        supplier = await catalog.create_supplier(
            "n" * 160, ruc="1" * 20, phone="5" * 32, email="a" * 148 + "@example.com"
        )
        assert len(supplier.email) == 160

    async def test_duplicate_ruc_propagates(self, catalog, mock_supplier_store):
        mock_supplier_store.create_supplier.side_effect = DuplicateSupplierError("20123456789")

        with pytest.raises(DuplicateSupplierError):
            await catalog.create_supplier("Acme", ruc="20123456789")


class TestQueries:
    async def test_get(self, catalog, acme):
        assert await catalog.get_supplier("sup-1") is acme

    async def test_get_missing(self, catalog, mock_supplier_store):
        mock_supplier_store.get_supplier.return_value = None

        with pytest.raises(SupplierNotFoundError):
            await catalog.get_supplier("ghost")

    async def test_list(self, catalog, acme):
        assert await catalog.list_suppliers() == [acme]


class TestUpdateSupplier:
    async def test_partial_update(self, catalog, acme):
        updated = await catalog.update_supplier("sup-1", email="ventas@acme.pe")

        assert updated.email == "ventas@acme.pe"
        assert updated.name == acme.name
        assert updated.ruc == acme.ruc
        assert updated.phone == acme.phone

    async def test_empty_string_clears_optional_field(self, catalog):
        updated = await catalog.update_supplier("sup-1", phone="")
        assert updated.phone is None

    async def test_name_cannot_be_cleared(self, catalog, mock_supplier_store):
        with pytest.raises(InvalidInputError):
            await catalog.update_supplier("sup-1", name="  ")
        mock_supplier_store.update_supplier.assert_not_awaited()

    async def test_no_changes_skips_write(self, catalog, mock_supplier_store, acme):
        assert await catalog.update_supplier("sup-1") is acme
        mock_supplier_store.update_supplier.assert_not_awaited()

    async def test_missing(self, catalog, mock_supplier_store):
        mock_supplier_store.get_supplier.return_value = None

        with pytest.raises(SupplierNotFoundError):
            await catalog.update_supplier("ghost", name="Acme")

    async def test_vanished_during_update(self, catalog, mock_supplier_store):
        mock_supplier_store.update_supplier.side_effect = None
        mock_supplier_store.update_supplier.return_value = None

        with pytest.raises(SupplierNotFoundError):
            await catalog.update_supplier("sup-1", name="Acme")
