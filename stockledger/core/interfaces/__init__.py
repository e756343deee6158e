"""Core interfaces (ports) for dependency injection."""

from stockledger.core.interfaces.authorization import IAuthorizationContext
from stockledger.core.interfaces.material_store import IMaterialStore
from stockledger.core.interfaces.supplier_store import ISupplierStore
from stockledger.core.interfaces.transaction_store import (
    IStockUnitOfWork,
    ITransactionStore,
)

__all__ = [
    "IAuthorizationContext",
    "IMaterialStore",
    "IStockUnitOfWork",
    "ISupplierStore",
    "ITransactionStore",
]
