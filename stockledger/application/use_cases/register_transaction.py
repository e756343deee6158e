"""Register Transaction Use Case: one stock movement through the ledger."""

from stockledger.application.dto.requests import RegisterTransactionRequest
from stockledger.application.dto.responses import RegisterTransactionResponse
from stockledger.config import get_logger
from stockledger.core.entities.transaction import RegisterTransactionResult
from stockledger.core.services import StockLedger

logger = get_logger(__name__)


class RegisterTransactionUseCase:
    """Register an ENTRY, USAGE or ADJUSTMENT for a material."""

    def __init__(self, ledger: StockLedger | None = None):
        self._ledger = ledger

    async def _get_ledger(self) -> StockLedger:
        if self._ledger is None:
            from stockledger.application.services import get_stock_ledger

            self._ledger = await get_stock_ledger()
        return self._ledger

    async def execute(
        self,
        request: RegisterTransactionRequest,
        actor_user_id: str | None,
    ) -> RegisterTransactionResult:
        """Execute register transaction use case."""
        logger.info(
            "register_transaction_started",
            material_id=request.material_id,
            project_id=request.project_id,
            tx_type=str(request.tx_type),
        )

        ledger = await self._get_ledger()
        return await ledger.register_transaction(
            material_id=request.material_id,
            project_id=request.project_id,
            tx_type=request.tx_type,
            quantity=request.quantity,
            actor_user_id=actor_user_id,
            supplier_id=request.supplier_id,
            notes=request.notes,
        )

    def to_response(self, result: RegisterTransactionResult) -> RegisterTransactionResponse:
        """Convert result to API response."""
        return RegisterTransactionResponse(
            result=result.result,
            transaction_id=result.transaction_id,
            material_id=result.material_id,
            new_stock=result.new_stock,
            previous_stock=result.previous_stock,
            transaction_quantity=result.transaction_quantity,
            transaction_type=result.transaction_type.value,
            tx_date=result.tx_date,
        )
