"""
Dependency injection container for FastAPI.

Provides service instances and the acting user to route handlers.
"""

from fastapi import Header, HTTPException, status

from stockledger.application.services import (
    get_material_catalog,
    get_stock_ledger,
    get_supplier_catalog,
)
from stockledger.application.use_cases import (
    CreateMaterialUseCase,
    ListTransactionsUseCase,
    RegisterTransactionUseCase,
)
from stockledger.core.services import MaterialCatalog, StockLedger, SupplierCatalog


async def get_actor_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """
    Acting user id, set by the authentication layer in front of the service.

    Ownership is checked by the ledger; this only rejects anonymous calls.
    """
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id.strip()


# Service dependencies
async def get_ledger() -> StockLedger:
    """Get stock ledger."""
    return await get_stock_ledger()


async def get_catalog() -> MaterialCatalog:
    """Get material catalog."""
    return await get_material_catalog()


async def get_suppliers() -> SupplierCatalog:
    """Get supplier catalog."""
    return await get_supplier_catalog()


# Use case dependencies
async def get_register_transaction_use_case() -> RegisterTransactionUseCase:
    """Get register transaction use case."""
    return RegisterTransactionUseCase(ledger=await get_stock_ledger())


async def get_list_transactions_use_case() -> ListTransactionsUseCase:
    """Get list transactions use case."""
    return ListTransactionsUseCase(ledger=await get_stock_ledger())


async def get_create_material_use_case() -> CreateMaterialUseCase:
    """Get create material use case."""
    return CreateMaterialUseCase(catalog=await get_material_catalog())
