"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection
"""

from stockledger.application.dto import (
    CreateMaterialRequest,
    ErrorResponse,
    HealthResponse,
    MaterialListResponse,
    MaterialResponse,
    ProviderHealthResponse,
    RegisterTransactionRequest,
    RegisterTransactionResponse,
    StockResponse,
    TransactionPageResponse,
    TransactionResponse,
)
from stockledger.application.services import (
    get_material_catalog,
    get_stock_ledger,
    reset_services,
)
from stockledger.application.use_cases import (
    CreateMaterialUseCase,
    ListTransactionsUseCase,
    RegisterTransactionUseCase,
)

__all__ = [
    # Request DTOs
    "RegisterTransactionRequest",
    "CreateMaterialRequest",
    # Response DTOs
    "RegisterTransactionResponse",
    "StockResponse",
    "TransactionResponse",
    "TransactionPageResponse",
    "MaterialResponse",
    "MaterialListResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
    # Use Cases
    "RegisterTransactionUseCase",
    "ListTransactionsUseCase",
    "CreateMaterialUseCase",
    # Service factories
    "get_stock_ledger",
    "get_material_catalog",
    "reset_services",
]
