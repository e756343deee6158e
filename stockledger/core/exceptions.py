"""
Domain exceptions for the stock ledger.

Provides specific exception types for each ledger failure kind.
"""

from decimal import Decimal
from typing import Any


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


# Validation Exceptions
class ValidationError(LedgerError):
    """Input validation failed."""

    pass


class InvalidQuantityError(ValidationError):
    """Quantity is missing, non-numeric, not strictly positive, or too large."""

    def __init__(self, quantity: Any, message: str = "Quantity must be greater than 0"):
        super().__init__(
            message,
            code="INVALID_QUANTITY",
            details={"quantity": str(quantity)[:50] if quantity is not None else None},
        )


class InvalidTransactionTypeError(ValidationError):
    """Transaction type is not one of the supported kinds."""

    def __init__(self, tx_type: Any):
        super().__init__(
            "Transaction type must be one of: ENTRY, USAGE, ADJUSTMENT",
            code="INVALID_TRANSACTION_TYPE",
            details={"tx_type": str(tx_type)[:50] if tx_type is not None else None},
        )


class InvalidInputError(ValidationError):
    """An optional or auxiliary field is malformed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid value for '{field}': {message}",
            code="INVALID_INPUT",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Lookup Exceptions
class NotFoundError(LedgerError):
    """Base exception for lookups that must not leak existence."""

    pass


class MaterialNotFoundError(NotFoundError):
    """Material is absent, belongs to another project, or is archived."""

    def __init__(self, material_id: str):
        super().__init__(
            f"Material not found: {material_id}",
            code="MATERIAL_NOT_FOUND",
            details={"material_id": material_id},
        )


class SupplierNotFoundError(NotFoundError):
    """Supplier is absent from the catalog."""

    def __init__(self, supplier_id: str):
        super().__init__(
            f"Supplier not found: {supplier_id}",
            code="SUPPLIER_NOT_FOUND",
            details={"supplier_id": supplier_id},
        )


class AccessDeniedError(NotFoundError):
    """Acting user does not own the material's project."""

    def __init__(self, material_id: str | None, project_id: str):
        super().__init__(
            "Access denied to project resources",
            code="ACCESS_DENIED",
            details={"material_id": material_id, "project_id": project_id},
        )
        self.material_id = material_id
        self.project_id = project_id


# Conflict Exceptions
class ConflictError(LedgerError):
    """Base exception for business-rule conflicts on current state."""

    pass


class InsufficientStockError(ConflictError):
    """USAGE would drive stock below zero."""

    def __init__(
        self,
        material_id: str,
        current_stock: Decimal,
        requested_quantity: Decimal,
    ):
        super().__init__(
            f"Insufficient stock. Current: {current_stock}, Requested: {requested_quantity}",
            code="INSUFFICIENT_STOCK",
            details={
                "material_id": material_id,
                "current_stock": str(current_stock),
                "requested_quantity": str(requested_quantity),
            },
        )
        self.current_stock = current_stock
        self.requested_quantity = requested_quantity


class NegativeStockRejectedError(ConflictError):
    """Computed stock is negative; the write was discarded."""

    def __init__(self, material_id: str, attempted_stock: Decimal):
        super().__init__(
            "Stock cannot be negative",
            code="NEGATIVE_STOCK_REJECTED",
            details={
                "material_id": material_id,
                "attempted_stock": str(attempted_stock),
            },
        )


class StockLimitExceededError(ConflictError):
    """Computed stock is above the largest balance the ledger stores."""

    def __init__(self, material_id: str, attempted_stock: Decimal, limit: Decimal):
        super().__init__(
            f"Stock must stay below {limit:f}",
            code="STOCK_LIMIT_EXCEEDED",
            details={
                "material_id": material_id,
                "attempted_stock": str(attempted_stock),
            },
        )


class DuplicateMaterialError(ConflictError):
    """A material with the same name already exists in the project."""

    def __init__(self, project_id: str, name: str):
        super().__init__(
            f"Material '{name}' already exists in project {project_id}",
            code="DUPLICATE_MATERIAL",
            details={"project_id": project_id, "name": name},
        )


class DuplicateSupplierError(ConflictError):
    """Another supplier already carries the same tax registration number."""

    def __init__(self, ruc: str):
        super().__init__(
            f"Supplier with RUC {ruc} already exists",
            code="DUPLICATE_SUPPLIER",
            details={"ruc": ruc},
        )


class ConcurrentModificationError(ConflictError):
    """Stock changed between read and write; the whole operation may be retried."""

    retryable = True

    def __init__(self, material_id: str, expected_version: int):
        super().__init__(
            f"Material {material_id} was modified concurrently",
            code="CONCURRENT_MODIFICATION",
            details={
                "material_id": material_id,
                "expected_version": expected_version,
            },
        )


# Storage Exceptions
class StorageUnavailableError(LedgerError):
    """Persistence failed or timed out. Raw driver text stays in the logs."""

    retryable = True

    def __init__(self, operation: str):
        super().__init__(
            f"Storage unavailable during {operation}",
            code="STORAGE_UNAVAILABLE",
            details={"operation": operation},
        )
