"""Column encoders shared by the SQLite stores."""

from datetime import UTC, datetime
from decimal import Decimal

from stockledger.core.services.stock_impact import quantize


def encode_timestamp(value: datetime) -> str:
    """Fixed-width UTC ISO string, so text order matches time order."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def decode_timestamp(value: str | None) -> datetime:
    """Parse a stored timestamp. Every timestamp column is NOT NULL."""
    if not value:
        raise ValueError(f"missing timestamp: {value!r}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def encode_decimal(value: Decimal) -> str:
    return str(quantize(value))


def decode_decimal(value: str | None) -> Decimal | None:
    if value is None:
        return None
    return quantize(Decimal(str(value)))
