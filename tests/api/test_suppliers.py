"""API tests for supplier catalog endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from stockledger.api.dependencies import get_suppliers
from stockledger.api.main import app
from stockledger.core.entities import Supplier
from stockledger.core.exceptions import (
    DuplicateSupplierError,
    InvalidInputError,
    SupplierNotFoundError,
)
from stockledger.core.services import SupplierCatalog

HEADERS = {"X-User-Id": "user-owner"}
BASE = "/api/suppliers"


def _supplier(**kwargs) -> Supplier:
    values = {"id": "sup-1", "name": "Acme Steel", "ruc": "20123456789"}
    values.update(kwargs)
    return Supplier(**values)


@pytest.fixture
def mock_suppliers():
    catalog = AsyncMock(spec=SupplierCatalog)
    catalog.create_supplier.return_value = _supplier()
    catalog.get_supplier.return_value = _supplier()
    catalog.list_suppliers.return_value = [_supplier(), _supplier(id="sup-2", name="Beta")]
    catalog.update_supplier.return_value = _supplier(phone="555-0100")
    return catalog


@pytest.fixture
async def suppliers_client(mock_suppliers):
    app.dependency_overrides[get_suppliers] = lambda: mock_suppliers
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_suppliers, None)


class TestSuppliersAPI:
    async def test_create(self, suppliers_client: AsyncClient, mock_suppliers):
        response = await suppliers_client.post(
            BASE, json={"name": "Acme Steel", "ruc": "20123456789"}, headers=HEADERS
        )

        assert response.status_code == 201
        assert response.json()["id"] == "sup-1"
        mock_suppliers.create_supplier.assert_awaited_once_with(
            "Acme Steel",
            ruc="20123456789",
            phone=None,
            email=None,
            actor_user_id="user-owner",
        )

    async def test_create_requires_user(self, suppliers_client: AsyncClient):
        response = await suppliers_client.post(BASE, json={"name": "Acme"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHENTICATED"

    async def test_create_invalid(self, suppliers_client: AsyncClient, mock_suppliers):
        mock_suppliers.create_supplier.side_effect = InvalidInputError(
            "email", "must be a valid email address", "nope"
        )

        response = await suppliers_client.post(
            BASE, json={"name": "Acme", "email": "nope"}, headers=HEADERS
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_INPUT"

    async def test_create_duplicate_ruc(self, suppliers_client: AsyncClient, mock_suppliers):
        mock_suppliers.create_supplier.side_effect = DuplicateSupplierError("20123456789")

        response = await suppliers_client.post(
            BASE, json={"name": "Acme", "ruc": "20123456789"}, headers=HEADERS
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_SUPPLIER"

    async def test_list(self, suppliers_client: AsyncClient):
        response = await suppliers_client.get(BASE, headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [s["name"] for s in data["items"]] == ["Acme Steel", "Beta"]

    async def test_get_unknown(self, suppliers_client: AsyncClient, mock_suppliers):
        mock_suppliers.get_supplier.side_effect = SupplierNotFoundError("ghost")

        response = await suppliers_client.get(f"{BASE}/ghost", headers=HEADERS)

        assert response.status_code == 404
        assert response.json()["error_code"] == "SUPPLIER_NOT_FOUND"

    async def test_update(self, suppliers_client: AsyncClient, mock_suppliers):
        response = await suppliers_client.patch(
            f"{BASE}/sup-1", json={"phone": "555-0100"}, headers=HEADERS
        )

        assert response.status_code == 200
        assert response.json()["phone"] == "555-0100"
        mock_suppliers.update_supplier.assert_awaited_once_with(
            "sup-1",
            name=None,
            ruc=None,
            phone="555-0100",
            email=None,
            actor_user_id="user-owner",
        )
