"""Stock movement and stock query endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from stockledger.api.dependencies import (
    get_actor_user_id,
    get_ledger,
    get_list_transactions_use_case,
    get_register_transaction_use_case,
)
from stockledger.application.dto.requests import RegisterTransactionRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    RegisterTransactionResponse,
    StockResponse,
    TransactionPageResponse,
)
from stockledger.application.use_cases import (
    ListTransactionsUseCase,
    RegisterTransactionUseCase,
)
from stockledger.core.services import StockLedger

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post(
    "/transactions",
    response_model=RegisterTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def register_transaction(
    request: RegisterTransactionRequest,
    actor_user_id: str = Depends(get_actor_user_id),
    use_case: RegisterTransactionUseCase = Depends(get_register_transaction_use_case),
) -> RegisterTransactionResponse:
    """Register an ENTRY, USAGE or ADJUSTMENT and return the new stock."""
    result = await use_case.execute(request, actor_user_id)
    return use_case.to_response(result)


@router.get(
    "/materials/{material_id}/stock",
    response_model=StockResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_stock(
    material_id: str,
    ledger: StockLedger = Depends(get_ledger),
) -> StockResponse:
    """Get the current stock of a material."""
    stock = await ledger.get_stock(material_id)
    return StockResponse(material_id=material_id, stock=stock)


@router.get(
    "/materials/{material_id}/transactions",
    response_model=TransactionPageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def list_transactions(
    material_id: str,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    page: int = Query(default=1),
    page_size: int | None = Query(default=None),
    use_case: ListTransactionsUseCase = Depends(get_list_transactions_use_case),
) -> TransactionPageResponse:
    """List a material's transactions, newest first."""
    result = await use_case.execute(
        material_id,
        from_date=from_date,
        to_date=to_date,
        page=page,
        page_size=page_size,
    )
    return use_case.to_response(result)
