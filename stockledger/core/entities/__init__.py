"""Core domain entities."""

from stockledger.core.entities.material import (
    NAME_MAX_LENGTH,
    UNIT_MAX_LENGTH,
    Material,
    MaterialStatus,
    Project,
)
from stockledger.core.entities.supplier import (
    EMAIL_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    RUC_MAX_LENGTH,
    SUPPLIER_NAME_MAX_LENGTH,
    Supplier,
)
from stockledger.core.entities.transaction import (
    NOTES_MAX_LENGTH,
    RegisterTransactionResult,
    Transaction,
    TransactionPage,
    TxType,
)

__all__ = [
    # Material
    "Material",
    "MaterialStatus",
    "Project",
    "NAME_MAX_LENGTH",
    "UNIT_MAX_LENGTH",
    # Supplier
    "Supplier",
    "SUPPLIER_NAME_MAX_LENGTH",
    "RUC_MAX_LENGTH",
    "PHONE_MAX_LENGTH",
    "EMAIL_MAX_LENGTH",
    # Ledger
    "Transaction",
    "TxType",
    "RegisterTransactionResult",
    "TransactionPage",
    "NOTES_MAX_LENGTH",
]
