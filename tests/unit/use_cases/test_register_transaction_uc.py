"""Tests for RegisterTransactionUseCase."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from stockledger.application.dto.requests import RegisterTransactionRequest
from stockledger.application.use_cases import RegisterTransactionUseCase
from stockledger.core.entities import RegisterTransactionResult, TxType
from stockledger.core.exceptions import InsufficientStockError


@pytest.fixture
def result() -> RegisterTransactionResult:
    return RegisterTransactionResult(
        transaction_id=7,
        material_id="mat-1",
        new_stock=Decimal("30.000"),
        previous_stock=Decimal("50.000"),
        transaction_quantity=Decimal("20.000"),
        transaction_type=TxType.USAGE,
        tx_date=datetime(2024, 3, 1, 12, 0, tzinfo=UTC),
    )


@pytest.fixture
def mock_ledger(result):
    ledger = AsyncMock()
    ledger.register_transaction.return_value = result
    return ledger


class TestRegisterTransactionUseCase:
    async def test_passes_request_fields(self, mock_ledger):
        uc = RegisterTransactionUseCase(ledger=mock_ledger)
        request = RegisterTransactionRequest(
            material_id="mat-1",
            project_id="proj-1",
            tx_type="USAGE",
            quantity="20",
            supplier_id="sup-1",
            notes="slab pour",
        )

        await uc.execute(request, "user-owner")

        mock_ledger.register_transaction.assert_awaited_once_with(
            material_id="mat-1",
            project_id="proj-1",
            tx_type="USAGE",
            quantity="20",
            actor_user_id="user-owner",
            supplier_id="sup-1",
            notes="slab pour",
        )

    async def test_to_response(self, mock_ledger, result):
        uc = RegisterTransactionUseCase(ledger=mock_ledger)

        response = uc.to_response(result)

        assert response.result == "SUCCESS"
        assert response.transaction_id == 7
        assert response.transaction_type == "USAGE"
        assert response.new_stock == Decimal("30.000")
        assert response.model_dump(mode="json")["new_stock"] == "30.000"

    async def test_errors_propagate(self, mock_ledger):
        mock_ledger.register_transaction.side_effect = InsufficientStockError(
            "mat-1", Decimal("1"), Decimal("2")
        )
        uc = RegisterTransactionUseCase(ledger=mock_ledger)
        request = RegisterTransactionRequest(
            material_id="mat-1", project_id="proj-1", tx_type="USAGE", quantity=2
        )

        with pytest.raises(InsufficientStockError):
            await uc.execute(request, "user-owner")
