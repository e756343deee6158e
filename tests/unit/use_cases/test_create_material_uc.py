"""Tests for CreateMaterialUseCase."""

from decimal import Decimal
from unittest.mock import AsyncMock

from stockledger.application.dto.requests import CreateMaterialRequest
from stockledger.application.use_cases import CreateMaterialUseCase
from stockledger.core.entities import Material


class TestCreateMaterialUseCase:
    async def test_execute_and_respond(self):
        material = Material(
            id="mat-9",
            project_id="proj-1",
            name="Sand",
            unit="m3",
            min_level=Decimal("2.000"),
        )
        catalog = AsyncMock()
        catalog.create_material.return_value = material
        uc = CreateMaterialUseCase(catalog=catalog)

        created = await uc.execute(
            "proj-1",
            CreateMaterialRequest(name="Sand", unit="m3", min_level="2"),
            "user-owner",
        )
        response = uc.to_response(created)

        catalog.create_material.assert_awaited_once_with(
            project_id="proj-1",
            name="Sand",
            unit="m3",
            min_level="2",
            actor_user_id="user-owner",
        )
        assert response.id == "mat-9"
        assert response.status == "ACTIVE"
        assert response.is_low_stock is True
