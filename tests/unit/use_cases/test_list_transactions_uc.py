"""Tests for ListTransactionsUseCase."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

from stockledger.application.use_cases import ListTransactionsUseCase
from stockledger.core.entities import Transaction, TransactionPage, TxType


def _page() -> TransactionPage:
    tx = Transaction(
        id=3,
        material_id="mat-1",
        tx_type=TxType.ADJUSTMENT,
        quantity=Decimal("12.000"),
        previous_stock=Decimal("30.000"),
        new_stock=Decimal("12.000"),
        tx_date=datetime(2024, 3, 1, tzinfo=UTC),
    )
    return TransactionPage(items=[tx], total=3, page=1, page_size=1)


class TestListTransactionsUseCase:
    async def test_execute_forwards_filters(self):
        ledger = AsyncMock()
        ledger.list_transactions.return_value = _page()
        uc = ListTransactionsUseCase(ledger=ledger)
        start = datetime(2024, 1, 1, tzinfo=UTC)

        await uc.execute("mat-1", from_date=start, page=2, page_size=1)

        ledger.list_transactions.assert_awaited_once_with(
            "mat-1", from_date=start, to_date=None, page=2, page_size=1
        )

    def test_to_response(self):
        uc = ListTransactionsUseCase(ledger=AsyncMock())

        response = uc.to_response(_page())

        assert response.total == 3
        assert response.total_pages == 3
        assert response.has_more is True
        assert response.items[0].tx_type == "ADJUSTMENT"
        assert response.items[0].previous_stock == Decimal("30.000")
