"""List Transactions Use Case: paginated ledger history of a material."""

from datetime import datetime

from stockledger.application.dto.responses import (
    TransactionPageResponse,
    TransactionResponse,
)
from stockledger.core.entities.transaction import Transaction, TransactionPage
from stockledger.core.services import StockLedger


def transaction_to_response(transaction: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=transaction.id,  # type: ignore[arg-type]
        material_id=transaction.material_id,
        tx_type=transaction.tx_type.value,
        quantity=transaction.quantity,
        supplier_id=transaction.supplier_id,
        notes=transaction.notes,
        previous_stock=transaction.previous_stock,
        new_stock=transaction.new_stock,
        tx_date=transaction.tx_date,
    )


class ListTransactionsUseCase:
    """Page through a material's transactions, newest first."""

    def __init__(self, ledger: StockLedger | None = None):
        self._ledger = ledger

    async def _get_ledger(self) -> StockLedger:
        if self._ledger is None:
            from stockledger.application.services import get_stock_ledger

            self._ledger = await get_stock_ledger()
        return self._ledger

    async def execute(
        self,
        material_id: str,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> TransactionPage:
        ledger = await self._get_ledger()
        return await ledger.list_transactions(
            material_id,
            from_date=from_date,
            to_date=to_date,
            page=page,
            page_size=page_size,
        )

    def to_response(self, result: TransactionPage) -> TransactionPageResponse:
        """Convert page to API response."""
        return TransactionPageResponse(
            items=[transaction_to_response(t) for t in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
            has_more=result.has_more,
        )
