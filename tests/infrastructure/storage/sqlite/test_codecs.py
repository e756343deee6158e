"""Tests for SQLite column codecs."""

from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from stockledger.infrastructure.storage.sqlite.codecs import (
    decode_decimal,
    decode_timestamp,
    encode_decimal,
    encode_timestamp,
)


def test_timestamp_is_fixed_width_utc():
    plus_two = timezone(timedelta(hours=2))
    encoded = encode_timestamp(datetime(2024, 1, 1, 14, 0, tzinfo=plus_two))
    assert encoded == "2024-01-01T12:00:00.000000+00:00"


def test_naive_timestamp_assumed_utc():
    assert encode_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000000+00:00"


def test_encoded_timestamps_sort_chronologically():
    a = datetime(2024, 1, 1, 9, 59, 59, 999999, tzinfo=UTC)
    b = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    assert encode_timestamp(a) < encode_timestamp(b)


def test_decode_timestamp():
    value = decode_timestamp("2024-01-01T12:00:00.000000+00:00")
    assert value == datetime(2024, 1, 1, 12, tzinfo=UTC)
    assert decode_timestamp("2024-01-01 12:00:00").tzinfo is UTC


@pytest.mark.parametrize("value", [None, ""])
def test_decode_missing_timestamp_raises(value):
    with pytest.raises(ValueError):
        decode_timestamp(value)


def test_decimal_codec():
    assert encode_decimal(Decimal("5")) == "5.000"
    assert encode_decimal(Decimal("0.0005")) == "0.001"
    assert decode_decimal("12.5") == Decimal("12.500")
    assert decode_decimal(None) is None
