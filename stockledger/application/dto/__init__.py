"""Data transfer objects for the API layer."""

from stockledger.application.dto.requests import (
    CreateMaterialRequest,
    CreateSupplierRequest,
    RegisterTransactionRequest,
    UpdateMaterialRequest,
    UpdateSupplierRequest,
)
from stockledger.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    MaterialListResponse,
    MaterialResponse,
    ProviderHealthResponse,
    RegisterTransactionResponse,
    StockResponse,
    SupplierListResponse,
    SupplierResponse,
    TransactionPageResponse,
    TransactionResponse,
)

__all__ = [
    # Requests
    "RegisterTransactionRequest",
    "CreateMaterialRequest",
    "UpdateMaterialRequest",
    "CreateSupplierRequest",
    "UpdateSupplierRequest",
    # Responses
    "RegisterTransactionResponse",
    "StockResponse",
    "TransactionResponse",
    "TransactionPageResponse",
    "MaterialResponse",
    "MaterialListResponse",
    "SupplierResponse",
    "SupplierListResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
