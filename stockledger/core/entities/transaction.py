"""Stock ledger entities."""

import math
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

NOTES_MAX_LENGTH = 400


class TxType(str, Enum):
    """Types of stock movements."""

    ENTRY = "ENTRY"
    USAGE = "USAGE"
    ADJUSTMENT = "ADJUSTMENT"  # absolute set, not a delta


class Transaction(BaseModel):
    """Immutable ledger entry recording one stock movement."""

    id: int | None = None
    material_id: str
    tx_type: TxType
    quantity: Decimal  # always positive
    supplier_id: str | None = None
    notes: str | None = None
    previous_stock: Decimal | None = None
    new_stock: Decimal | None = None
    tx_date: datetime = Field(default_factory=lambda: datetime.now(UTC))


class RegisterTransactionResult(BaseModel):
    """Outcome of a successful stock movement."""

    result: str = "SUCCESS"
    transaction_id: int
    material_id: str
    new_stock: Decimal
    previous_stock: Decimal
    transaction_quantity: Decimal
    transaction_type: TxType
    tx_date: datetime


class TransactionPage(BaseModel):
    """One page of ledger entries plus the total matching the filter."""

    items: list[Transaction] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 50

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return math.ceil(self.total / self.page_size)

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages
