"""
Stock-impact rules.

Pure functions, no storage access:
- ENTRY adds the quantity
- USAGE subtracts the quantity
- ADJUSTMENT replaces the stock with the quantity
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from stockledger.core.entities.transaction import TxType
from stockledger.core.exceptions import InvalidQuantityError, InvalidTransactionTypeError

QUANTITY_STEP = Decimal("0.001")

# Quantities, stock and thresholds stay below this in magnitude, so every
# sum fits the 28-digit decimal context with 3 fractional digits
MAX_AMOUNT = Decimal("1e15")


def quantize(value: Decimal) -> Decimal:
    """Round to the ledger's 3 fractional digits."""
    return value.quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP)


def within_limit(value: Decimal) -> bool:
    return abs(value) < MAX_AMOUNT


def to_decimal(value: Any) -> Decimal | None:
    """Convert user input to a finite Decimal, or None if it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        # str() keeps the shortest repr, avoiding binary expansion noise
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def parse_quantity(value: Any) -> Decimal:
    """Parse a movement quantity. Must be > 0 after rounding and below MAX_AMOUNT."""
    quantity = to_decimal(value)
    if quantity is None:
        raise InvalidQuantityError(value)
    if not within_limit(quantity):
        raise InvalidQuantityError(value, f"Quantity must be less than {MAX_AMOUNT:f}")
    quantity = quantize(quantity)
    if quantity <= 0:
        raise InvalidQuantityError(value)
    return quantity


def parse_tx_type(value: Any) -> TxType:
    """Parse a transaction type. Matching is case-sensitive."""
    if isinstance(value, TxType):
        return value
    if not isinstance(value, str):
        raise InvalidTransactionTypeError(value)
    try:
        return TxType(value)
    except ValueError:
        raise InvalidTransactionTypeError(value) from None


def compute_new_stock(tx_type: TxType, quantity: Decimal, current_stock: Decimal) -> Decimal:
    """Apply one movement to a stock level. May return a negative value."""
    if tx_type == TxType.ENTRY:
        return quantize(current_stock + quantity)
    if tx_type == TxType.USAGE:
        return quantize(current_stock - quantity)
    if tx_type == TxType.ADJUSTMENT:
        return quantize(quantity)
    raise InvalidTransactionTypeError(tx_type)


def fold_stock(
    movements: list[tuple[TxType, Decimal]],
    initial: Decimal = Decimal("0.000"),
) -> Decimal:
    """Replay movements in order starting from ``initial``."""
    stock = initial
    for tx_type, quantity in movements:
        stock = compute_new_stock(tx_type, quantity, stock)
    return stock
