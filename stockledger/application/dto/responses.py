"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
Decimal amounts serialize as strings to keep their 3 fractional digits.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class RegisterTransactionResponse(BaseModel):
    """Result of a registered stock movement."""

    result: str = "SUCCESS"
    transaction_id: int
    material_id: str
    new_stock: Decimal
    previous_stock: Decimal
    transaction_quantity: Decimal
    transaction_type: str
    tx_date: datetime


class StockResponse(BaseModel):
    """Current stock of a material."""

    material_id: str
    stock: Decimal


class TransactionResponse(BaseModel):
    """Ledger entry in response."""

    id: int
    material_id: str
    tx_type: str
    quantity: Decimal
    supplier_id: str | None = None
    notes: str | None = None
    previous_stock: Decimal | None = None
    new_stock: Decimal | None = None
    tx_date: datetime


class TransactionPageResponse(BaseModel):
    """One page of a material's ledger, newest first."""

    items: list[TransactionResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_more: bool


class MaterialResponse(BaseModel):
    """Material catalog entry response."""

    id: str
    project_id: str
    name: str
    unit: str
    stock: Decimal
    min_level: Decimal
    status: str
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime


class MaterialListResponse(BaseModel):
    """List of materials."""

    items: list[MaterialResponse]
    total: int


class SupplierResponse(BaseModel):
    """Supplier catalog entry response."""

    id: str
    name: str
    ruc: str | None = None
    phone: str | None = None
    email: str | None = None
    created_at: datetime
    updated_at: datetime


class SupplierListResponse(BaseModel):
    """List of suppliers."""

    items: list[SupplierResponse]
    total: int


class ProviderHealthResponse(BaseModel):
    """Health of one backing service."""

    name: str
    available: bool
    latency_ms: float | None = None
    schema_version: str | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. MATERIAL_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
