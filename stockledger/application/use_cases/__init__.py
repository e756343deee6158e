"""Application use cases."""

from stockledger.application.use_cases.create_material import (
    CreateMaterialUseCase,
    material_to_response,
)
from stockledger.application.use_cases.list_transactions import (
    ListTransactionsUseCase,
    transaction_to_response,
)
from stockledger.application.use_cases.register_transaction import (
    RegisterTransactionUseCase,
)

__all__ = [
    "RegisterTransactionUseCase",
    "ListTransactionsUseCase",
    "CreateMaterialUseCase",
    "material_to_response",
    "transaction_to_response",
]
